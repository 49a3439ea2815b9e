"""Built-in session modules."""

from .mac_changer import MacChanger

__all__ = ["MacChanger"]
