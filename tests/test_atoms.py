from unidisc.atoms import Atom, atom, normalize_atom


def test_parse_atom():
    assert Atom.parse("teaches(F1, CS101)") == Atom("teaches", ("F1", "CS101"))


def test_parse_flat_atom():
    assert Atom.parse("raining") is None


def test_parse_no_arguments():
    parsed = Atom.parse("ready()")
    assert parsed == Atom("ready", ())
    assert str(parsed) == "ready()"


def test_normalize_atom_whitespace():
    assert normalize_atom("  enrolled ( CS102 )  ") == "enrolled(CS102)"
    assert normalize_atom("teaches(F1,CS101)") == "teaches(F1, CS101)"
    assert normalize_atom("  raining ") == "raining"


def test_atom_builder():
    assert atom("must_use_room", "CS101", "R1") == "must_use_room(CS101, R1)"
    assert atom("enrolled", " CS102 ") == "enrolled(CS102)"
