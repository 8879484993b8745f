from sable.reader.parser import read, read_all, lex

__all__ = ["read", "read_all", "lex"]
