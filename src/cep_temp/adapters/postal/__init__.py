from .base import PostalAdapter
from .viacep import ViaCepPostalAdapter

__all__ = ["PostalAdapter", "ViaCepPostalAdapter"]
