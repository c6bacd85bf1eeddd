from vaultgraph.parser.codespans import mask_inline_code
from vaultgraph.parser.wikilinks import extract_refs, find_wikilinks, parse_exact


def test_find_wikilinks_targets_display_and_offsets():
    line = "See [[people/freya|Freya]] and [[projects/website]] today"
    links = find_wikilinks(line)

    assert [(l.target, l.display_text) for l in links] == [
        ("people/freya", "Freya"),
        ("projects/website", None),
    ]
    for link in links:
        assert line[link.start : link.end] == link.literal
    assert links[0].literal == "[[people/freya|Freya]]"


def test_triple_bracket_is_not_a_link():
    assert find_wikilinks("[[[people/a]]]") == []
    links = find_wikilinks("[[[people/a]]]", allow_triple=True)
    assert [l.target for l in links] == ["people/a"]


def test_blank_and_unclosed_links_are_ignored():
    assert find_wikilinks("[[ ]]") == []
    assert find_wikilinks("[[unclosed") == []
    assert find_wikilinks("[single]") == []


def test_parse_exact():
    assert parse_exact("[[people/freya]]") == ("people/freya", None)
    assert parse_exact(" [[people/freya|Freya]] ") == ("people/freya", "Freya")
    assert parse_exact("[[a]] [[b]]") is None
    assert parse_exact("[[a]] trailing") is None
    assert parse_exact("[[]]") is None
    assert parse_exact("plain") is None


def test_extract_refs_numbers_lines_from_start():
    found = list(extract_refs("owner: '[[people/freya]]'\nsummary: none\nteam: [[people/thor]]", 2))
    assert [(line, link.target) for line, link in found] == [
        (2, "people/freya"),
        (4, "people/thor"),
    ]


def test_mask_inline_code_keeps_offsets():
    line = "a `[[x]]` b ``c ` d`` e"
    masked = mask_inline_code(line)
    assert len(masked) == len(line)
    assert "[[x]]" not in masked
    assert masked == "a " + " " * 7 + " b " + " " * 9 + " e"


def test_mask_inline_code_unmatched_backticks_stay_literal():
    assert mask_inline_code("a `b") == "a `b"
    assert mask_inline_code("``a` b") == "``a` b"


def test_mask_inline_code_spans_line_breaks():
    assert mask_inline_code("a `b\nc` d") == "a" + " " * 3 + "\n" + " " * 3 + "d"
