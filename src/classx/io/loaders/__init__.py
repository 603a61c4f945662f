from .errors import LoaderError
from .input_loader import InputFileSpec, load_input

__all__ = ["LoaderError", "InputFileSpec", "load_input"]
