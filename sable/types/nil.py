from __future__ import annotations


class NilType:
    """The empty list. Distinct from #f and always truthy."""

    _instance: NilType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "()"


class VoidType:
    """Result of forms that produce no useful value (define, set!, display)."""

    _instance: VoidType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "#<void>"


Nil = NilType()
Void = VoidType()
