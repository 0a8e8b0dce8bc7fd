"""Tests for the item reference parser."""

from treasure.engine.reference import Reference, parse_reference


def test_plain_name():
    request = parse_reference("shirt")
    assert request.refs == [Reference("shirt", amount=0, index=1)]
    assert not request.everything
    assert request.is_specific()


def test_leading_number_sets_amount():
    request = parse_reference("2 awesome gold shirts")
    assert request.refs == [Reference("awesome gold shirts", amount=2, index=1)]
    assert not request.is_specific()


def test_number_words():
    assert parse_reference("two shirts").refs == [Reference("shirts", amount=2)]
    assert parse_reference("eleven caps").refs == [Reference("caps", amount=11)]
    assert parse_reference("one shirt").is_specific()


def test_trailing_number_sets_index():
    request = parse_reference("shirt 2")
    assert request.refs == [Reference("shirt", amount=0, index=2)]
    assert request.is_specific()


def test_leading_number_wins_over_trailing_number():
    """The trailing number stays part of the name when an amount is given."""
    request = parse_reference("2 shirts 3")
    assert request.refs == [Reference("shirts 3", amount=2, index=1)]


def test_all_prefix_is_wildcard_index():
    request = parse_reference("all shirts")
    assert request.refs == [Reference("shirts", amount=0, index=0)]
    assert not request.everything
    assert not request.is_specific()


def test_everything():
    for text in ("all", "everything", "the everything"):
        request = parse_reference(text)
        assert request.everything
        assert request.refs == [Reference("", amount=0, index=0)]


def test_lists():
    request = parse_reference("shirt, cap and 3 coins")
    assert request.refs == [
        Reference("shirt"),
        Reference("cap"),
        Reference("coins", amount=3),
    ]
    assert not request.is_specific()


def test_except():
    request = parse_reference("all except gold coin and cap")
    assert request.everything
    assert request.original == "all"
    assert request.except_refs == [Reference("gold coin"), Reference("cap")]


def test_empty_phrase():
    request = parse_reference("")
    assert request.refs == []
    assert not request.everything
    assert not request.is_specific()


def test_gibberish_is_kept_literally():
    request = parse_reference("flibber jabber")
    assert request.refs == [Reference("flibber jabber")]
