from unittest.mock import MagicMock, patch

from blogspec import __main__ as cli
from blogspec.persistence.database import is_memory_sqlite


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])

    assert args.host == "127.0.0.1"
    assert args.port == 8000


def test_parser_overrides() -> None:
    args = cli.build_parser().parse_args(["--host", "0.0.0.0", "--port", "5001"])

    assert args.host == "0.0.0.0"
    assert args.port == 5001


def test_main_serves_the_app_with_uvicorn() -> None:
    with (
        patch.object(cli, "configure_logging") as configure_logging,
        patch.object(cli, "uvicorn") as uvicorn,
        patch.dict(
            "os.environ", {"BLOGSPEC_DATABASE_URL": "sqlite+aiosqlite:///:memory:"}
        ),
    ):
        uvicorn.run = MagicMock()
        cli.main(["--port", "9000"])

    configure_logging.assert_called_once()
    _, kwargs = uvicorn.run.call_args
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9000


def test_is_memory_sqlite() -> None:
    assert is_memory_sqlite("sqlite+aiosqlite:///:memory:")
    assert is_memory_sqlite("sqlite+aiosqlite://")
    assert not is_memory_sqlite("sqlite+aiosqlite:///./blogging.db")
    assert not is_memory_sqlite("postgresql+asyncpg://u:p@localhost/blogs")
