from pathlib import Path
from sortimport.core.discovery import discover_go_files, is_go_file
from sortimport.support.config import SortImportConfig


def test_is_go_file():
    config = SortImportConfig(exclude_dirs=["vendor", "testdata"])
    root = Path("/project")

    # Valid
    assert is_go_file(root / "main.go", config, root)
    assert is_go_file(root / "pkg/util/util_test.go", config, root)

    # Invalid extensions
    assert not is_go_file(root / "README.md", config, root)
    assert not is_go_file(root / "go.mod", config, root)

    # Hidden files
    assert not is_go_file(root / ".hidden.go", config, root)

    # Excluded dirs
    assert not is_go_file(root / "vendor/github.com/x/y.go", config, root)
    assert not is_go_file(root / "pkg/testdata/input.go", config, root)


def test_is_go_file_exclusion_relative_to_root():
    config = SortImportConfig(exclude_dirs=["vendor"])
    root = Path("/home/vendor/project")
    assert is_go_file(root / "main.go", config, root)


def test_discover_go_files(tmp_path):
    # project/
    #   main.go
    #   pkg/util.go
    #   vendor/dep/dep.go
    #   .hidden.go
    #   notes.txt
    (tmp_path / "main.go").touch()
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "util.go").touch()
    (tmp_path / "vendor" / "dep").mkdir(parents=True)
    (tmp_path / "vendor" / "dep" / "dep.go").touch()
    (tmp_path / ".hidden.go").touch()
    (tmp_path / "notes.txt").touch()

    files = discover_go_files(tmp_path, SortImportConfig())

    assert files == [tmp_path / "main.go", tmp_path / "pkg" / "util.go"]


def test_discover_single_file(tmp_path):
    go_file = tmp_path / "main.go"
    go_file.touch()
    assert discover_go_files(go_file, SortImportConfig()) == [go_file]
