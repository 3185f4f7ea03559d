import pytest
import sys
from pathlib import Path

# Ensure src/ is in the python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

TEMPLATE_BUILD_LOG = """[1/3] CXX obj/app/main.o
FAILED: obj/app/main.o
clang++ -c ../../app/main.cc -o obj/app/main.o
In file included from ../../app/main.cc:3:
../../base/../app/box.h:12:10: error: no member named 'size' in 'Widget'
    return value.size();
           ~~~~~ ^
../../app/main.cc:20:5: note: in instantiation of member function 'Box<Widget>::length' requested here
  b.length();
    ^
1 error generated.
ninja: build stopped: subcommand failed.
"""

@pytest.fixture
def template_build_log():
    """
    Captured ninja output for a template error re-pointed by an
    instantiation note.
    """
    return TEMPLATE_BUILD_LOG

@pytest.fixture(autouse=True)
def reset_log_level():
    """CLI runs set the formatter's class-level threshold; restore it per test."""
    from ninjadiag.cli.formatter import OutputFormatter, SEVERITY_LEVELS

    yield
    OutputFormatter.level = SEVERITY_LEVELS["info"]
