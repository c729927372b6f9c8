import io

import pytest

from supertux_levels.reader import ParserError, ReaderDocument, RepeatedField, Symbol
from supertux_levels.reader.lexer import TokenType, tokenize


def read(text, context="test-doc"):
    return ReaderDocument.from_stream(io.StringIO(text), context)


def test_tokenize_literals_and_comments():
    tokens = list(tokenize('(tag ; comment here\n  42 -3 1.5 #t #f "a \\"q\\"\\n" sym-bol)'))
    kinds = [t.type for t in tokens]
    assert kinds == [
        TokenType.OPEN,
        TokenType.SYMBOL,
        TokenType.INTEGER,
        TokenType.INTEGER,
        TokenType.REAL,
        TokenType.BOOLEAN,
        TokenType.BOOLEAN,
        TokenType.STRING,
        TokenType.SYMBOL,
        TokenType.CLOSE,
    ]
    assert tokens[2].value == 42 and tokens[3].value == -3
    assert tokens[4].value == 1.5
    assert tokens[5].value is True and tokens[6].value is False
    assert tokens[7].value == 'a "q"\n'
    assert tokens[2].line == 2


def test_symbols_that_look_like_floats_stay_symbols():
    tokens = list(tokenize("inf nan"))
    assert [t.type for t in tokens] == [TokenType.SYMBOL, TokenType.SYMBOL]


def test_root_name_and_typed_reads():
    doc = read(
        '(supertux-level (version 2) (name (_ "Translated")) (author "Me")'
        " (target-time 30) (flag #t) (tiles 1 2 3) (speed 0.5))"
    )
    root = doc.get_root()
    assert root.name == "supertux-level"
    mapping = root.get_mapping()
    assert mapping.get_int("version") == 2
    assert mapping.get_string("name") == "Translated"
    assert mapping.get_string("author") == "Me"
    assert mapping.get_float("target-time") == 30.0
    assert mapping.get_bool("flag") is True
    assert mapping.get_int_list("tiles") == [1, 2, 3]
    assert mapping.get_float("speed") == 0.5
    assert mapping.get_string("contact", "fallback") == "fallback"
    assert mapping.has("tiles") and not mapping.has("missing")


def test_type_mismatch_names_context_and_key():
    mapping = read('(supertux-level\n  (version "two"))', context="levels/bad.stl").get_root().get_mapping()
    with pytest.raises(ParserError) as excinfo:
        mapping.get_int("version")
    message = str(excinfo.value)
    assert "levels/bad.stl:2" in message
    assert "'version'" in message


def test_booleans_are_not_integers():
    mapping = read("(root (count #t))").get_root().get_mapping()
    with pytest.raises(ParserError):
        mapping.get_int("count")


def test_items_preserve_document_order():
    mapping = read("(root (sector (name \"a\")) (other 1) (sector (name \"b\")) (sector (name \"c\")))").get_root().get_mapping()
    keys = [key for key, _ in mapping.items()]
    assert keys == ["sector", "other", "sector", "sector"]
    names = [obj.get_mapping().get_string("name") for key, obj in mapping.items() if key == "sector"]
    assert names == ["a", "b", "c"]


def test_to_dict_collects_repeated_keys():
    mapping = read("(path (node (x 1)) (node (x 2)) (mode circular))").get_root().get_mapping()
    result = mapping.to_dict()
    assert isinstance(result["node"], RepeatedField)
    assert result["node"] == [{"x": 1}, {"x": 2}]
    assert result["mode"] == "circular"


def test_missing_close_paren_reports_line():
    with pytest.raises(ParserError) as excinfo:
        read('(supertux-level\n  (name "x")\n  (sector (name "main")\n')
    assert excinfo.value.context == "test-doc"
    assert excinfo.value.line == 3


def test_unterminated_string():
    with pytest.raises(ParserError, match="unterminated string"):
        read('(root (name "oops))')


def test_extra_close_paren():
    with pytest.raises(ParserError, match="unexpected '\\)'"):
        read("(root (a 1)))")


def test_empty_document_and_content_after_root():
    with pytest.raises(ParserError, match="empty"):
        read("   ; only a comment\n")
    with pytest.raises(ParserError, match="after the root"):
        read("(root) (second)")


def test_malformed_mapping_entry():
    root = read('(root "bare string")').get_root()
    with pytest.raises(ParserError, match="malformed entry"):
        root.get_mapping()


def test_binary_stream_is_decoded():
    doc = ReaderDocument.from_stream(io.BytesIO('(root (name "Café"))'.encode("utf-8")), "bytes")
    assert doc.get_root().get_mapping().get_string("name") == "Café"


def test_from_file(tmp_path):
    path = tmp_path / "doc.stl"
    path.write_text("(root (value sym))", encoding="utf-8")
    doc = ReaderDocument.from_file(path)
    assert doc.get_filename() == str(path)
    value = doc.get_root().get_mapping().get("value")
    assert isinstance(value, Symbol) and value == "sym"
