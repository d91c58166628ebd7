import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

DATA = Path(__file__).resolve().parent / "data"

MINIMAL_DOTPLOT = """\
%!PS-Adobe-3.0 EPSF-3.0
%%Title: minimal

/DPdict 100 dict def
DPdict begin
/lpmin 1e-05 log def
/len 12 def
0.5 dup translate
drawgrid
%data starts here
1 12 0.5 ubox
showpage
end
"""


@pytest.fixture
def sample_path() -> Path:
    return DATA / "rnafold_dot.ps"


@pytest.fixture
def sample_text(sample_path: Path) -> str:
    return sample_path.read_text(encoding="latin-1")


@pytest.fixture
def minimal_text() -> str:
    return MINIMAL_DOTPLOT
