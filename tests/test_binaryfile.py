import pytest

from framekit.binaryfile import BinaryReader, BinaryWriter


@pytest.fixture
def path(tmp_path):
    return tmp_path / "data.bin"


def test_int_is_little_endian(path):
    with BinaryWriter(path) as writer:
        writer.write_int(1)
    assert path.read_bytes() == b"\x01\x00\x00\x00"


def test_string_has_length_prefix(path):
    with BinaryWriter(path) as writer:
        writer.write_string("abc")
    assert path.read_bytes() == b"\x03\x00\x00\x00abc"


def test_color3f_drops_alpha(path):
    with BinaryWriter(path) as writer:
        writer.write_color3f((0.25, 0.5, 0.75, 0.125))
    assert len(path.read_bytes()) == 12
    with BinaryReader(path) as reader:
        assert reader.read_color3f() == (0.25, 0.5, 0.75, 1.0)


def test_primitive_round_trip(path):
    with BinaryWriter(path) as writer:
        writer.write_bool(True)
        writer.write_bool(False)
        writer.write_word(65535)
        writer.write_int(-42)
        writer.write_uint(4000000000)
        writer.write_float(0.5)
        writer.write_double(3.141592653589793)
    with BinaryReader(path) as reader:
        assert reader.read_bool() is True
        assert reader.read_bool() is False
        assert reader.read_word() == 65535
        assert reader.read_int() == -42
        assert reader.read_uint() == 4000000000
        assert reader.read_float() == 0.5
        assert reader.read_double() == 3.141592653589793


def test_vector_round_trip(path):
    with BinaryWriter(path) as writer:
        writer.write_vector2((1.0, 2.0))
        writer.write_vector3([1.5, -2.5, 3.0])
        writer.write_vector4((0.0, 1.0, 2.0, 3.0))
        writer.write_color4f((0.5, 0.25, 0.125, 1.0))
        writer.write_quaternion((0.0, 0.0, 0.0, 1.0))
    with BinaryReader(path) as reader:
        assert reader.read_vector2() == (1.0, 2.0)
        assert reader.read_vector3() == (1.5, -2.5, 3.0)
        assert reader.read_vector4() == (0.0, 1.0, 2.0, 3.0)
        assert reader.read_color4f() == (0.5, 0.25, 0.125, 1.0)
        assert reader.read_vector4() == (0.0, 0.0, 0.0, 1.0)


def test_matrix_round_trip(path):
    rows = [[float(r * 4 + c) for c in range(4)] for r in range(4)]
    with BinaryWriter(path) as writer:
        writer.write_matrix(rows)
        writer.write_matrix([v for row in rows for v in row])
    with BinaryReader(path) as reader:
        expected = tuple(tuple(row) for row in rows)
        assert reader.read_matrix() == expected
        assert reader.read_matrix() == expected


def test_string_and_bytes_round_trip(path):
    with BinaryWriter(path) as writer:
        writer.write_string("hello world")
        writer.write_string("")
        writer.write_bytes(b"\x00\x01\x02")
    with BinaryReader(path) as reader:
        assert reader.read_string() == "hello world"
        assert reader.read_string() == ""
        assert reader.read_bytes(3) == b"\x00\x01\x02"


def test_writer_replaces_existing_content(path):
    path.write_bytes(b"old content here")
    with BinaryWriter(path) as writer:
        writer.write_bool(True)
    assert path.read_bytes() == b"\x01"


def test_short_read_raises(path):
    path.write_bytes(b"\x01\x02")
    with BinaryReader(path) as reader:
        with pytest.raises(EOFError):
            reader.read_int()


def test_wrong_component_count(path):
    with BinaryWriter(path) as writer:
        with pytest.raises(ValueError):
            writer.write_vector3((1.0, 2.0))


def test_empty_path_rejected():
    with pytest.raises(ValueError):
        BinaryWriter("")
    with pytest.raises(ValueError):
        BinaryReader("")


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        BinaryReader(tmp_path / "missing.bin")


def test_write_after_close(path):
    writer = BinaryWriter(path)
    writer.close()
    writer.close()
    with pytest.raises(ValueError):
        writer.write_int(1)