from enum import Enum

class FilterMode(Enum):
    """Which slice of the ledger a view shows"""
    ALL = "all"
    INCOME = "income" # in
    EXPENSE = "expense" # out

    @classmethod
    def parse(cls, value: "FilterMode | str") -> "FilterMode":
        """Accept an enum member or its name/value in any case"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown filter mode '{value}' (expected one of: {choices})") from None
