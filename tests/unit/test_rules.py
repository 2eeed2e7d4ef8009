"""
Rules loading and schema validation tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from src.rules.loader import load_rules
from src.rules.models import Rules


@pytest.fixture
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


def _minimal() -> dict[str, Any]:
    return {
        "project": {"slug": "content-ledger", "rules_version": "1.0"},
        "ledger": {"owner": "SP_OWNER", "custodian": "SP_CUSTODY"},
    }


def _write(tmp_path: Path, data: Any) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


def test_project_rules_file_is_valid(project_root: Path) -> None:
    rules = load_rules(project_root / "rules.yaml")

    assert rules.ledger.owner != rules.ledger.custodian
    assert rules.royalties.premium_max_percent == 50
    assert rules.ratings.min_rating == 1
    assert rules.ratings.max_rating == 5
    assert rules.reports.max_reason_length == 500


def test_defaults_fill_optional_sections(tmp_path: Path) -> None:
    rules = load_rules(_write(tmp_path, _minimal()))

    assert rules.royalties.max_percent == 100
    assert rules.storage.db_filename == "ledger.db"
    assert rules.ops.data_dir_env == "LEDGER_DATA_DIR"
    assert rules.ops.required_env == []


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "absent.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("project: [unclosed")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(path)


def test_missing_ledger_section(tmp_path: Path) -> None:
    data = _minimal()
    del data["ledger"]

    with pytest.raises(ValueError, match="validation failed"):
        load_rules(_write(tmp_path, data))


def test_owner_and_custodian_must_differ(tmp_path: Path) -> None:
    data = _minimal()
    data["ledger"]["custodian"] = "SP_OWNER"

    with pytest.raises(ValueError):
        load_rules(_write(tmp_path, data))


def test_rating_bounds_must_be_ordered() -> None:
    data = _minimal()
    data["ratings"] = {"min_rating": 5, "max_rating": 1}

    with pytest.raises(ValueError):
        Rules.model_validate(data)


@pytest.mark.parametrize("percent", [0, 101])
def test_premium_cap_range(percent: int) -> None:
    data = _minimal()
    data["royalties"] = {"premium_max_percent": percent}

    with pytest.raises(ValueError):
        Rules.model_validate(data)


def test_yaml_inside_markdown_fence(tmp_path: Path) -> None:
    body = yaml.safe_dump(_minimal())
    path = tmp_path / "rules.md"
    path.write_text(f"# Rules\n\n```yaml\n{body}```\n\nTrailing notes.\n")

    rules = load_rules(path)

    assert rules.project.slug == "content-ledger"
