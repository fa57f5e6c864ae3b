from pathlib import Path

import pytest

from impi import SCHEMES, STD_LOCAL_THIRD_PARTY, STD_THIRD_PARTY_LOCAL, Verifier, VerifyOptions

# Импорт из унифицированной инфраструктуры
from tests.infrastructure.file_utils import write, write_go

LOCAL_PREFIX = "github.com/pavius/impi"


@pytest.fixture
def options() -> VerifyOptions:
    return VerifyOptions(scheme=STD_LOCAL_THIRD_PARTY, local_prefix=LOCAL_PREFIX)


@pytest.fixture
def slt_verifier() -> Verifier:
    """Verifier for std -> local -> third party with the project prefix."""
    opts = VerifyOptions(scheme=STD_LOCAL_THIRD_PARTY, local_prefix=LOCAL_PREFIX)
    return Verifier(SCHEMES[STD_LOCAL_THIRD_PARTY], opts)


@pytest.fixture
def stl_verifier() -> Verifier:
    """Verifier for std -> third party -> local with the project prefix."""
    opts = VerifyOptions(scheme=STD_THIRD_PARTY_LOCAL, local_prefix=LOCAL_PREFIX)
    return Verifier(SCHEMES[STD_THIRD_PARTY_LOCAL], opts)


@pytest.fixture
def gotree(tmp_path: Path) -> Path:
    """
    Небольшое дерево Go-пакетов:

        good.go, bad.go (unsorted), good_test.go (unsorted),
        sub/ok.go, sub/gen.go (generated, unsorted),
        vendor/ и testdata/ с плохими файлами (не должны проверяться).
    """
    root = tmp_path / "proj"
    write_go(root / "good.go", "fmt", "os", "", LOCAL_PREFIX + "/a")
    write_go(root / "bad.go", "os", "fmt")
    write_go(root / "bad_test.go", "path", "fmt")
    write(root / "README.md", "not go\n")
    write_go(root / "sub" / "ok.go", "strings")
    write(
        root / "sub" / "gen.go",
        "// Code generated by stringer. DO NOT EDIT.\n\npackage sub\n\nimport (\n\t\"os\"\n\t\"fmt\"\n)\n",
    )
    write_go(root / "vendor" / "x" / "v.go", "os", "fmt")
    write_go(root / "testdata" / "t.go", "os", "fmt")
    write_go(root / ".hidden" / "h.go", "os", "fmt")
    return root
