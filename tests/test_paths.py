import pytest

from framekit.paths import (
    combine,
    create_folder,
    create_folders,
    exist_directory,
    exist_file,
    get_directory_name,
    get_extension,
    get_file_name,
    get_file_name_without_extension,
    get_files,
)


@pytest.fixture
def root(tmp_path):
    return tmp_path.as_posix() + "/"


def test_directory_name_converts_backslashes():
    assert get_directory_name("C:\\dir\\file.txt") == "C:/dir/"


def test_directory_name_without_slash_is_empty():
    assert get_directory_name("file.txt") == ""


def test_file_name():
    assert get_file_name("a/b/c.txt") == "c.txt"
    assert get_file_name("plain") == "plain"


def test_extension():
    assert get_extension("a/b/c.txt") == "txt"


def test_extension_missing_returns_whole_path():
    assert get_extension("noext") == "noext"


def test_file_name_without_extension_strips_last_only():
    assert get_file_name_without_extension("a/b/c.tar.gz") == "c.tar"
    assert get_file_name_without_extension("a\\b\\readme") == "readme"


def test_directory_and_file_name_rebuild_path():
    path = "x/y/z/model.bin"
    assert combine(get_directory_name(path), get_file_name(path)) == path


def test_combine_parts_and_list():
    assert combine("a/", "b") == "a/b"
    assert combine(["a/", "b/", "c"]) == "a/b/c"


def test_exist_checks(root, tmp_path):
    (tmp_path / "f.txt").write_text("data")
    assert exist_file(root + "f.txt") is True
    assert exist_file(root) is True
    assert exist_directory(root) is True
    assert exist_directory(root + "f.txt") is False
    assert exist_file(root + "missing.txt") is False


def test_create_folder_once(root):
    create_folder(root + "one")
    create_folder(root + "one")
    assert exist_directory(root + "one") is True


def test_create_folder_missing_parent_is_ignored(root):
    create_folder(root + "no/such/child")
    assert exist_directory(root + "no/such/child") is False


def test_create_folders_nested(root):
    create_folders(root + "a\\b/c")
    assert exist_directory(root + "a/b/c") is True


def test_get_files_recursive(root, tmp_path):
    (tmp_path / "a.txt").write_text("1")
    (tmp_path / "b.log").write_text("2")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("3")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "d.txt").write_text("4")
    assert get_files(root, "*", True) == [
        root + "a.txt",
        root + "b.log",
        root + "sub/c.txt",
    ]


def test_get_files_without_recursion(root, tmp_path):
    (tmp_path / "a.txt").write_text("1")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("3")
    assert get_files(root, "*", False) == [root + "a.txt"]


def test_get_files_pattern_also_filters_folders(root, tmp_path):
    (tmp_path / "a.txt").write_text("1")
    (tmp_path / "b.log").write_text("2")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("3")
    assert get_files(root, "*.txt", True) == [root + "a.txt"]


def test_get_files_missing_directory(root):
    assert get_files(root + "missing/", "*", True) == []