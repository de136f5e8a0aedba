from __future__ import annotations


class CSemVerError(ValueError):
    pass


class RangeError(CSemVerError):
    def __init__(self, field: str, value: int, *, low: int, high: int) -> None:
        self.field = field
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f"{field} must be in range [{low}-{high}] (got {value})")


class PatternError(CSemVerError):
    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} must match [0-9A-Za-z-]+ (got {value!r})")


class PairingError(CSemVerError):
    pass


class FileVersionOverflowError(CSemVerError):
    pass


class UnknownPreReleaseError(CSemVerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown pre-release name: {name!r}")


def check_range(field: str, value: int, *, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field} must be an int (got {type(value).__name__})")
    if value < low or value > high:
        raise RangeError(field, value, low=low, high=high)
    return value
