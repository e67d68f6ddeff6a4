from glue_runtime.config import LoaderOptions
from glue_runtime.glue import MultipleWorldBuilders, NilWorld, Registry

__all__ = ["LoaderOptions", "MultipleWorldBuilders", "NilWorld", "Registry"]
