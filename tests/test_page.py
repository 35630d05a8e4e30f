"""Tests for the Page value object, reversal and content equivalence."""
import pytest

from stablepage.core.ordering import Record, SortSpecification
from stablepage.core.page import Page, PageEntry, equals, reverse
from stablepage.core.tokens import TokenCodec


@pytest.fixture
def codec():
    return TokenCodec(secret="test-secret")


@pytest.fixture
def page(codec):
    spec = SortSpecification.build("initials", "asc")
    first, last = Record("3", {"initials": "AA"}), Record("9", {"initials": "BC"})
    return Page(
        content=(PageEntry("AA", "3"), PageEntry("BC", "5"), PageEntry("BC", "9")),
        forward_token=codec.issue(spec, last),
        backward_token=codec.issue(spec, first),
    )


class TestReverse:
    def test_reverses_content_and_swaps_tokens(self, page):
        reversed_page = reverse(page)

        assert reversed_page.labels == ["BC-9", "BC-5", "AA-3"]
        assert reversed_page.forward_token is page.backward_token
        assert reversed_page.backward_token is page.forward_token

    def test_reverse_twice_restores_page(self, page):
        twice = page.reverse().reverse()

        assert equals(twice, page)
        assert twice.forward_token is page.forward_token

    def test_input_is_not_mutated(self, page):
        reverse(page)

        assert page.labels == ["AA-3", "BC-5", "BC-9"]

    def test_empty_page_reverses_to_itself(self):
        empty = Page.empty()

        assert reverse(empty) is empty
        assert empty.forward_token is None
        assert empty.backward_token is None


class TestEquals:
    def test_tokens_do_not_affect_equivalence(self, page):
        bare = Page(content=page.content)

        assert equals(page, bare)
        assert page == bare
        assert hash(page) == hash(bare)

    def test_order_matters(self, page):
        assert not equals(page, reverse(page))

    def test_identifier_matters(self, page):
        other = Page(content=(PageEntry("AA", "3"), PageEntry("BC", "5"), PageEntry("BC", "10")))

        assert page != other

    def test_not_equal_to_other_types(self, page):
        assert page != page.labels


class TestAccessors:
    def test_first_and_last(self, page):
        assert page.first == PageEntry("AA", "3")
        assert page.last == PageEntry("BC", "9")
        assert len(page) == 3

    def test_empty_first_and_last(self):
        assert Page.empty().first is None
        assert Page.empty().last is None
        assert not Page.empty()

    def test_describe_uses_token_labels(self, page):
        assert page.describe() == "content: ['AA-3', 'BC-5', 'BC-9']\nprev: AA\nnext: BC\n"

    def test_page_is_immutable(self, page):
        with pytest.raises(AttributeError):
            page.content = ()
