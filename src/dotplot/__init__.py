"""Read, annotate and re-write RNAfold dot-plot PostScript files."""

from importlib import metadata

from .annotations import AnnotationKind, AnnotationStore, ColoredRecord
from .definitions import FIXED_DEFINITIONS, DefinitionTable
from .errors import DotPlotError, FileError, FormatError, InvalidArgument
from .io import open_dotplot, save_dotplot
from .keys import BasePairKey
from .model import DotPlot
from .parser import parse
from .serializer import serialize
from .structure import decode_structure

try:  # pragma: no cover - metadata only at runtime
    __version__ = metadata.version("dotplot")
except metadata.PackageNotFoundError:  # pragma: no cover - source tree / editable installs
    __version__ = "0.0.0"

__all__ = [
    "AnnotationKind",
    "AnnotationStore",
    "BasePairKey",
    "ColoredRecord",
    "DefinitionTable",
    "DotPlot",
    "DotPlotError",
    "FIXED_DEFINITIONS",
    "FileError",
    "FormatError",
    "InvalidArgument",
    "decode_structure",
    "open_dotplot",
    "parse",
    "save_dotplot",
    "serialize",
    "__version__",
]
