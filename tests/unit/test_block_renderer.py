import pytest
from sortimport.core.block_renderer import render_block
from sortimport.support.models import ClassifiedImports, Group, ImportEntry


def test_render_single_group():
    ci = ClassifiedImports()
    ci.append(Group.STANDARD, ImportEntry('"fmt"'))
    ci.append(Group.STANDARD, ImportEntry('"os"'))

    assert render_block(ci) == 'import (\n\t"fmt"\n\t"os"\n)'


def test_render_groups_separated_by_blank_line():
    ci = ClassifiedImports()
    ci.append(Group.STANDARD, ImportEntry('"fmt"'))
    ci.append(Group.THIRD_PARTY, ImportEntry('"bitbucket.org/example/pkg"', "APA"))
    ci.append(Group.LOCAL, ImportEntry('"github.com/org/proj/pkg1"'))

    assert render_block(ci) == (
        "import (\n"
        '\t"fmt"\n'
        "\n"
        '\tAPA "bitbucket.org/example/pkg"\n'
        "\n"
        '\t"github.com/org/proj/pkg1"\n'
        ")"
    )


def test_render_skips_empty_groups():
    ci = ClassifiedImports()
    ci.append(Group.LOCAL, ImportEntry('"me/pkg"'))
    ci.append(Group.SECOND_PARTY, ImportEntry('"corp/lib"'))

    assert render_block(ci) == 'import (\n\t"corp/lib"\n\n\t"me/pkg"\n)'


def test_render_empty_raises():
    with pytest.raises(ValueError):
        render_block(ClassifiedImports())
