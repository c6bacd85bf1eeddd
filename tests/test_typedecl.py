from vaultgraph.parser.typedecl import parse_type_declaration, serialize_type_declaration
from vaultgraph.parser.values import is_valid_date, is_valid_datetime, parse_arguments, parse_field_value
from vaultgraph.schema import FieldKind, FieldValue


def test_declaration_with_fields():
    decl = parse_type_declaration("::meeting(time=09:00, attendees=[[[people/freya]], [[people/thor]]])", line=4)
    assert decl is not None
    assert decl.type_name == "meeting"
    assert decl.id is None
    assert decl.line == 4
    assert decl.fields["time"] == FieldValue.string("09:00")
    assert decl.fields["attendees"].as_array() == (
        FieldValue.ref("people/freya"),
        FieldValue.ref("people/thor"),
    )


def test_explicit_id():
    decl = parse_type_declaration("::meeting(id=standup, time=09:00)")
    assert decl.id == "standup"
    assert decl.fields["id"] == FieldValue.string("standup")

    assert parse_type_declaration("::task(id=42)").id == "42"
    assert parse_type_declaration("::task(id=)").id is None


def test_bare_and_empty_declarations():
    bare = parse_type_declaration("::meeting")
    assert bare.type_name == "meeting"
    assert bare.fields == {}

    empty = parse_type_declaration("  ::daily-log()  ")
    assert empty.type_name == "daily-log"
    assert empty.fields == {}


def test_non_declarations():
    assert parse_type_declaration("meeting(time=09:00)") is None
    assert parse_type_declaration("::bad name(x=1)") is None
    assert parse_type_declaration("::meeting(time=09:00) trailing") is None
    assert parse_type_declaration("::") is None


def test_field_value_shapes():
    assert parse_field_value("[[people/freya]]") == FieldValue.ref("people/freya")
    assert parse_field_value('"a, b"') == FieldValue.string("a, b")
    assert parse_field_value("true") == FieldValue.boolean(True)
    assert parse_field_value("false") == FieldValue.boolean(False)
    assert parse_field_value("1500") == FieldValue.number(1500)
    assert parse_field_value("-2.5") == FieldValue.number(-2.5)
    assert parse_field_value("2024-01-15") == FieldValue.date("2024-01-15")
    assert parse_field_value("2024-01-15T09:30:00Z") == FieldValue.datetime("2024-01-15T09:30:00Z")
    assert parse_field_value("2024-02-30") == FieldValue.string("2024-02-30")
    assert parse_field_value("inf") == FieldValue.string("inf")
    assert parse_field_value("").is_null()

    arr = parse_field_value("[a, 2, , [[x]]]")
    assert arr.kind is FieldKind.ARRAY
    assert arr.as_array() == (FieldValue.string("a"), FieldValue.number(2), FieldValue.ref("x"))
    assert parse_field_value("[]") == FieldValue.array([])


def test_parse_arguments():
    fields = parse_arguments('owner=[[people/freya]], note="x, y", flag, =orphan, n=1, n=2')
    assert fields == {
        "owner": FieldValue.ref("people/freya"),
        "note": FieldValue.string("x, y"),
        "flag": FieldValue.null(),
        "n": FieldValue.number(2),
    }
    assert parse_arguments("   ") == {}


def test_date_validation():
    assert is_valid_date("2024-02-29")
    assert not is_valid_date("2023-02-29")
    assert not is_valid_date("2024-1-5")
    assert is_valid_datetime("2024-01-15T09:30")
    assert is_valid_datetime("2024-01-15T09:30:00+02:00")
    assert not is_valid_datetime("2024-01-15T25:00")


def test_serialize_type_declaration_is_canonical():
    fields = {
        "time": FieldValue.string("09:00"),
        "id": FieldValue.string("standup"),
        "note": FieldValue.string("a, b"),
        "skip": FieldValue.null(),
        "owner": FieldValue.ref("people/freya"),
        "tags": FieldValue.array([FieldValue.string("x"), FieldValue.string("y")]),
        "done": FieldValue.boolean(False),
        "n": FieldValue.number(3.0),
    }
    assert serialize_type_declaration("meeting", fields) == (
        '::meeting(done=false, id=standup, n=3, note="a, b", owner=[[people/freya]], tags=[x, y], time=09:00)'
    )


def test_serialized_declaration_parses_back():
    fields = {"owner": FieldValue.ref("people/freya"), "note": FieldValue.string("a, b"), "n": FieldValue.number(2)}
    decl = parse_type_declaration(serialize_type_declaration("project", fields))
    assert decl.type_name == "project"
    assert decl.fields == fields
