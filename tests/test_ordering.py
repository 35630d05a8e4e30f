"""Tests for sort specifications and the record total order."""
import pytest

from stablepage.core.exceptions import ConfigurationError
from stablepage.core.ordering import Record, SortDirection, SortField, SortSpecification


class TestSortSpecificationBuild:
    """Construction appends the identifier tie-breaker in the same direction."""

    def test_appends_identifier_field(self):
        spec = SortSpecification.build("initials", SortDirection.ASCENDING)

        assert spec.fields == (
            SortField("initials", SortDirection.ASCENDING),
            SortField("id", SortDirection.ASCENDING),
        )
        assert spec.primary.name == "initials"
        assert spec.identifier.name == "id"

    def test_descending_applies_to_tie_breaker(self):
        spec = SortSpecification.build("initials", "desc", identifier_field="__key__")

        assert spec.field_names == ("initials", "__key__")
        assert all(f.direction is SortDirection.DESCENDING for f in spec.fields)

    @pytest.mark.parametrize("direction", ["asc", "ASCENDING", " Asc "])
    def test_direction_aliases(self, direction):
        assert SortSpecification.build("initials", direction).direction is SortDirection.ASCENDING

    def test_unknown_direction_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SortSpecification.build("initials", "sideways")

        assert exc_info.value.code == "CFG_DIRECTION_001"

    @pytest.mark.parametrize("primary", ["", "   "])
    def test_empty_primary_rejected(self, primary):
        with pytest.raises(ConfigurationError) as exc_info:
            SortSpecification.build(primary)

        assert exc_info.value.code == "CFG_PRIMARY_FIELD_001"

    def test_primary_equal_to_identifier_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SortSpecification.build("id", "asc", identifier_field="id")

        assert exc_info.value.details["identifier_field"] == "id"

    def test_empty_field_tuple_rejected(self):
        with pytest.raises(ConfigurationError):
            SortSpecification(())

    def test_mixed_directions_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SortSpecification(
                (SortField("initials", SortDirection.ASCENDING), SortField("id", SortDirection.DESCENDING))
            )

        assert exc_info.value.code == "CFG_SORT_001"
        assert exc_info.value.details["directions"] == ["asc", "desc"]

    def test_extra_fields_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SortSpecification(
                (
                    SortField("initials", SortDirection.ASCENDING),
                    SortField("kind", SortDirection.ASCENDING),
                    SortField("id", SortDirection.ASCENDING),
                )
            )

        assert exc_info.value.details["fields"] == ["initials", "kind", "id"]

    def test_repeated_field_rejected(self):
        with pytest.raises(ConfigurationError):
            SortSpecification(
                (SortField("id", SortDirection.ASCENDING), SortField("id", SortDirection.ASCENDING))
            )

    def test_rebuilt_from_signature(self):
        spec = SortSpecification.build("initials", "desc")

        assert SortSpecification.from_signature(*spec.signature) == spec


class TestReversalAndCompatibility:
    def test_reversed_inverts_every_field(self):
        spec = SortSpecification.build("initials", "asc")
        reversed_spec = spec.reversed()

        assert reversed_spec.field_names == spec.field_names
        assert all(f.direction is SortDirection.DESCENDING for f in reversed_spec.fields)
        assert reversed_spec.reversed() == spec

    def test_compatible_with_self_and_reversal(self):
        spec = SortSpecification.build("initials", "asc")

        assert spec.is_compatible(spec)
        assert spec.is_compatible(spec.reversed())

    def test_incompatible_field_set(self):
        spec = SortSpecification.build("initials", "asc")

        assert not spec.is_compatible(SortSpecification.build("name", "asc"))

    def test_incompatible_other_identifier(self):
        spec = SortSpecification.build("initials", "asc")

        assert not spec.is_compatible(SortSpecification.build("initials", "asc", identifier_field="__key__"))


class TestComparator:
    """Identifier breaks ties between equal primary values."""

    def test_ties_broken_by_identifier(self):
        spec = SortSpecification.build("initials", "asc")
        a = Record("17", {"initials": "BC"})
        b = Record("42", {"initials": "BC"})

        assert spec.compare(a, b) < 0
        assert spec.compare(b, a) > 0
        assert spec.compare(a, a) == 0

    def test_descending_inverts_both_fields(self):
        spec = SortSpecification.build("initials", "desc")
        records = [
            Record("2", {"initials": "AA"}),
            Record("1", {"initials": "BC"}),
            Record("3", {"initials": "BC"}),
        ]

        ordered = sorted(records, key=spec.sort_key)

        assert [r.identifier for r in ordered] == ["3", "1", "2"]

    def test_identifiers_compare_as_strings(self):
        spec = SortSpecification.build("initials", "asc")
        ten = Record(10, {"initials": "AA"})
        nine = Record(9, {"initials": "AA"})

        assert ten.identifier == "10"
        assert spec.compare(ten, nine) < 0

    def test_records_without_primary_value_excluded(self):
        spec = SortSpecification.build("initials", "asc")

        assert spec.includes(Record("1", {"initials": "AA"}))
        assert not spec.includes(Record("2", {"initials": None}))
        assert not spec.includes(Record("3", {}))


class TestRecord:
    def test_values_are_read_only(self):
        record = Record("1", {"initials": "AA"})

        with pytest.raises(TypeError):
            record.values["initials"] = "ZZ"

    def test_identifier_field_resolves_to_identifier(self):
        record = Record(7, {"initials": "AA"})

        assert record.value_of("id", identifier_field="id") == "7"
        assert record.value_of("initials", identifier_field="id") == "AA"
