"""Tests for option source resolution."""

from types import SimpleNamespace

import pytest

from formfields.errors import InvalidSourceType
from formfields.options import resolve_source, with_empty_default


class TestResolveSource:
    def test_mapping_keeps_insertion_order(self):
        source = resolve_source({"NZ": "New Zealand", "US": "United States", "GEM": "Germany"})
        assert list(source.items()) == [("NZ", "New Zealand"), ("US", "United States"), ("GEM", "Germany")]

    def test_mapping_keys_become_strings(self):
        assert resolve_source({1: "Technology", 2: "Gardening"}) == {"1": "Technology", "2": "Gardening"}

    def test_records_are_projected(self):
        records = [SimpleNamespace(id=1, title="Technology"), {"id": 2, "title": "Gardening"}]
        assert resolve_source(records) == {"1": "Technology", "2": "Gardening"}

    def test_records_with_custom_fields(self):
        records = [{"code": "NZ", "name": "New Zealand"}]
        assert resolve_source(records, key_field="code", label_field="name") == {"NZ": "New Zealand"}

    def test_object_with_map_projection(self):
        class Listing:
            def map(self, key_field, label_field):
                return {"1": f"{key_field}/{label_field}"}

        assert resolve_source(Listing()) == {"1": "id/title"}

    def test_sqlalchemy_rows(self, db_session, models):
        tags = db_session.query(models.Tag).order_by(models.Tag.id).all()
        assert resolve_source(tags) == {"1": "Technology", "2": "Gardening", "3": "Cooking", "4": "Sports"}

    def test_empty_list(self):
        assert resolve_source([]) == {}

    @pytest.mark.parametrize("raw", ["NZ,US", 42, None, ["a", "b"], [{"id": 1}]])
    def test_invalid_sources_raise(self, raw):
        with pytest.raises(InvalidSourceType) as excinfo:
            resolve_source(raw, field_name="Country")
        assert excinfo.value.code == "FF001"
        assert "Country" in excinfo.value.format()


class TestEmptyDefault:
    def test_placeholder_leads_the_source(self):
        source = with_empty_default({"NZ": "New Zealand"}, "(Select one)")
        assert list(source.items()) == [("", "(Select one)"), ("NZ", "New Zealand")]

    def test_placeholder_shadows_real_empty_key(self):
        source = with_empty_default({"NZ": "New Zealand", "": "Nowhere"}, "(Select one)")
        assert source == {"": "(Select one)", "NZ": "New Zealand"}
        assert list(source) == ["", "NZ"]
