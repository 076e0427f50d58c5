from pathlib import Path
from sortimport.support.models import (
    ClassifiedImports,
    Group,
    ImportEntry,
    ModuleDescriptor,
    PrefixConfig,
)


def test_group_order_is_fixed():
    assert list(Group) == [
        Group.STANDARD,
        Group.THIRD_PARTY,
        Group.SECOND_PARTY,
        Group.LOCAL,
    ]
    assert [int(g) for g in Group] == [0, 1, 2, 3]


def test_import_entry_render():
    assert ImportEntry('"fmt"').render() == '"fmt"'
    assert ImportEntry('"github.com/x/y"', "xy").render() == 'xy "github.com/x/y"'


def test_import_entry_bare_path():
    assert ImportEntry('"net/http"').bare_path == "net/http"
    assert ImportEntry("`net/http`").bare_path == "net/http"
    assert ImportEntry("net/http").bare_path == "net/http"


def test_import_entry_equality():
    assert ImportEntry('"x"', "a") == ImportEntry('"x"', "a")
    assert ImportEntry('"x"', "a") != ImportEntry('"x"', "b")
    assert len({ImportEntry('"x"'), ImportEntry('"x"')}) == 1


def test_classified_imports_defaults():
    ci = ClassifiedImports()
    assert ci.standard == []
    assert ci.third_party == []
    assert ci.second_party == []
    assert ci.local == []
    assert ci.count() == 0


def test_classified_imports_groups_in_order():
    ci = ClassifiedImports()
    ci.append(Group.LOCAL, ImportEntry('"l"'))
    ci.append(Group.STANDARD, ImportEntry('"s"'))

    assert [g for g, _ in ci.groups()] == list(Group)
    assert ci.group(Group.LOCAL) == [ImportEntry('"l"')]
    assert ci.count() == 2


def test_prefix_config_from_strings():
    cfg = PrefixConfig.from_strings("github.com/a, github.com/b,,", "")
    assert cfg.local_prefixes == ("github.com/a", "github.com/b")
    assert cfg.second_prefixes == ()

    assert PrefixConfig.from_strings(None, None) == PrefixConfig()


def test_module_descriptor_creation():
    md = ModuleDescriptor(root_path=Path("/tmp"), namespace="example.com/mod")
    assert md.root_path == Path("/tmp")
    assert md.namespace == "example.com/mod"
