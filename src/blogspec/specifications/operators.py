from enum import Enum


class ConditionOperator(str, Enum):
    """Operators supported by query conditions."""

    # Standard comparison
    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"

    # String operations
    LIKE = "like"
    ILIKE = "ilike"
    CONTAINS = "contains"
    ICONTAINS = "icontains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"

    # Null checks
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    # Logical operators
    AND = "and"
    OR = "or"
    NOT = "not"
