#!/usr/bin/env python3
"""Tests for backup documents."""

import copy

import pytest
import yaml

from finance_tracker.core.errors import PersistenceError, ValidationError
from finance_tracker.core.money import Money
from finance_tracker.storage import build_document, parse_document, read_backup, write_backup


@pytest.mark.unit
class TestParseDocument:
    """Test all-or-nothing document validation."""

    def test_parses_complete_document(self, sample_document):
        snapshot = parse_document(sample_document)
        assert [t.id for t in snapshot.transactions] == ["t1", "t2"]
        assert snapshot.budgets[0].limit == Money.from_amount(120)
        assert snapshot.profile.name == "Test User"
        assert snapshot.metadata == {"version": 1}

    @pytest.mark.parametrize("key", ["transactions", "budgets", "goals", "accounts"])
    def test_missing_collection_rejected(self, sample_document, key):
        del sample_document[key]
        with pytest.raises(ValidationError, match=key):
            parse_document(sample_document)

    def test_profile_is_optional(self, sample_document):
        del sample_document["profile"]
        assert parse_document(sample_document).profile is None

    def test_bad_record_names_its_position(self, sample_document):
        sample_document["goals"][0]["deadline"] = "someday"
        with pytest.raises(ValidationError, match=r"goals\[0\]"):
            parse_document(sample_document)

    def test_duplicate_ids_rejected(self, sample_document):
        sample_document["transactions"].append(copy.deepcopy(sample_document["transactions"][0]))
        with pytest.raises(ValidationError, match="duplicate id"):
            parse_document(sample_document)

    @pytest.mark.parametrize("document", [None, [], "text"])
    def test_non_mapping_rejected(self, document):
        with pytest.raises(ValidationError):
            parse_document(document)

    def test_build_then_parse(self, sample_document):
        snapshot = parse_document(sample_document)
        rebuilt = build_document(
            snapshot.transactions, snapshot.budgets, snapshot.goals, snapshot.accounts, snapshot.profile
        )
        assert rebuilt["version"] == 1
        assert "exported_at" in rebuilt
        assert parse_document(rebuilt).transactions == snapshot.transactions


@pytest.mark.unit
class TestBackupFiles:
    """Test reading and writing backup files."""

    def test_json_file(self, sample_document, temp_dir):
        path = write_backup(temp_dir / "backup.json", sample_document)
        assert read_backup(path) == sample_document

    def test_yaml_file(self, sample_document, temp_dir):
        path = write_backup(temp_dir / "backup.yaml", sample_document)
        assert yaml.safe_load(path.read_text())["accounts"][0]["name"] == "Checking"
        assert read_backup(path) == sample_document

    def test_missing_file(self, temp_dir):
        with pytest.raises(PersistenceError):
            read_backup(temp_dir / "absent.json")

    def test_corrupt_file(self, temp_dir):
        path = temp_dir / "broken.yml"
        path.write_text("transactions: [unclosed")
        with pytest.raises(PersistenceError):
            read_backup(path)
