import textwrap
from pathlib import Path

import pytest

from impi.config import DEFAULT_CONFIG_NAME, ImpiCfg, load_config, merge_cli
from impi.errors import SetupError
from impi.types import VerifyOptions

from tests.infrastructure.file_utils import write


def test_missing_default_config_gives_defaults(tmp_path: Path):
    assert load_config(cwd=tmp_path) == ImpiCfg()


def test_default_config_is_picked_up(tmp_path: Path):
    write(tmp_path / DEFAULT_CONFIG_NAME, textwrap.dedent("""
        scheme: stdThirdPartyLocal
        local: github.com/acme/proj
        ignore: "zz_*.go"
        skip_tests: true
        skip_paths:
          - mocks/
          - \\.pb\\.go$
        ignore_generated: true
        workers: 3
    """))
    cfg = load_config(cwd=tmp_path)
    assert cfg.scheme == "stdThirdPartyLocal"
    assert cfg.workers == 3
    assert cfg.to_options() == VerifyOptions(
        scheme="stdThirdPartyLocal",
        local_prefix="github.com/acme/proj",
        skip_tests=True,
        skip_paths=("mocks/", r"\.pb\.go$"),
        ignore_generated=True,
        ignore_pattern="zz_*.go",
    )


def test_single_skip_path_string_is_accepted():
    cfg = ImpiCfg.from_dict({"skip_paths": "mocks/"})
    assert cfg.skip_paths == ["mocks/"]


def test_empty_file_gives_defaults(tmp_path: Path):
    p = write(tmp_path / "c.yaml", "")
    assert load_config(p) == ImpiCfg()


def test_explicit_missing_file_is_error(tmp_path: Path):
    with pytest.raises(SetupError, match="Config file not found"):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "text, fragment",
    [
        ("scheme: [a, b]\n", "scheme: expected string"),
        ("skip_tests: 1\n", "skip_tests: expected bool"),
        ("workers: 0\n", "workers: expected positive integer"),
        ("workers: true\n", "workers: expected positive integer"),
        ("skip_paths: [1]\n", "skip_paths: expected list of strings"),
        ("colour: red\n", "unknown key(s): colour"),
        ("- a\n- b\n", "YAML must be a mapping"),
        ("scheme: [unclosed\n", "invalid YAML"),
    ],
)
def test_invalid_config(tmp_path: Path, text, fragment):
    p = write(tmp_path / "c.yaml", text)
    with pytest.raises(SetupError) as ei:
        load_config(p)
    assert fragment in str(ei.value)


def test_cli_values_override_file_values():
    base = ImpiCfg(scheme="stdThirdPartyLocal", local="a.b", skip_tests=True, skip_paths=["x"])
    merged = merge_cli(base, {
        "scheme": "stdLocalThirdParty",
        "local": None,
        "skip_tests": None,
        "skip_paths": ["y", "z"],
        "workers": 2,
    })
    assert merged.scheme == "stdLocalThirdParty"
    assert merged.local == "a.b"
    assert merged.skip_tests is True
    assert merged.skip_paths == ["y", "z"]
    assert merged.workers == 2
    # base config is untouched
    assert base.scheme == "stdThirdPartyLocal"


def test_unset_flags_do_not_clear_file_values():
    base = ImpiCfg(ignore_generated=True, skip_paths=["x"])
    merged = merge_cli(base, {"ignore_generated": False, "skip_paths": []})
    assert merged.ignore_generated is True
    assert merged.skip_paths == ["x"]
