"""
Parsing of Go source files with Tree-sitter.

Go requires every import declaration to follow the package clause and to
precede all other top-level declarations, so the import section is one
contiguous byte span after the package clause. The whole file must parse
cleanly; the text after the last import declaration is carried over
verbatim.
"""
from dataclasses import dataclass

from tree_sitter import Language, Node, Parser
import tree_sitter_go as tsgo

from sortimport.support.exceptions import ParseError
from sortimport.support.models import ImportEntry

BOM = "\ufeff"


@dataclass(frozen=True)
class GoSource:
    """The parsed header of a Go source file."""
    text: str
    package_name: str
    header: str
    imports: tuple[ImportEntry, ...]
    import_decls: tuple[tuple[int, int], ...]
    body: str
    newline: str = "\n"

    def with_import_block(self, block: str) -> str:
        """
        Return new source text with every import declaration replaced by block.
        The block is placed one blank line after the package clause and one
        blank line before the first following declaration. The result uses
        the newline style of the original file throughout.
        """
        body = _strip_leading_blank_lines(self.body)

        output = self.header + "\n\n" + block
        if body.strip():
            output += "\n\n" + body
        output = output.rstrip("\r\n") + "\n"

        output = output.replace("\r\n", "\n")
        if self.newline != "\n":
            output = output.replace("\n", self.newline)
        return output


def _strip_leading_blank_lines(text: str) -> str:
    text = text.lstrip(" \t;")
    while True:
        line, sep, rest = text.partition("\n")
        if not sep or line.strip():
            return text
        text = rest


def _detect_newline(text: str) -> str:
    index = text.find("\n")
    if index > 0 and text[index - 1] == "\r":
        return "\r\n"
    return "\n"


def get_parser() -> Parser:
    return Parser(Language(tsgo.language()))


class _Document:
    """Go source text together with its Tree-sitter tree."""

    def __init__(self, text: str, filename: str):
        self.filename = filename
        self.data = text.encode("utf-8")
        self.tree = get_parser().parse(self.data)

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def node_text(self, node: Node) -> str:
        return self.data[node.start_byte:node.end_byte].decode("utf-8")

    def slice(self, start: int, end: int | None = None) -> str:
        return self.data[start:end].decode("utf-8")

    def error(self, node: Node, message: str) -> ParseError:
        return ParseError(self.filename, node.start_point[0] + 1, message)


def _find_error(node: Node) -> Node:
    """Descend to the first ERROR or MISSING node below node."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            return _find_error(child)
    return node


def _comments(node: Node, limit: int):
    """Yield every comment node below node that starts before the limit byte."""
    for child in node.children:
        if child.start_byte >= limit:
            break
        if child.type == "comment":
            yield child
        elif child.child_count:
            yield from _comments(child, limit)


def _import_specs(doc: _Document, decl: Node) -> list[ImportEntry]:
    entries = []
    for child in decl.named_children:
        if child.type == "import_spec":
            specs = [child]
        elif child.type == "import_spec_list":
            specs = [c for c in child.named_children if c.type == "import_spec"]
        else:
            continue

        for spec in specs:
            path = spec.child_by_field_name("path")
            if path is None:
                raise doc.error(spec, "missing import path")
            name = spec.child_by_field_name("name")
            alias = doc.node_text(name) if name is not None else None
            entries.append(ImportEntry(path=doc.node_text(path), alias=alias))
    return entries


def _body_start(last_import: Node, comments: list[Node], next_decl: Node | None) -> int:
    """
    Find where the rest of the file begins after the last import declaration.
    A comment on the same line as the declaration is dropped, as is a run of
    comment lines directly below it that is followed by a blank line.
    Comment lines that run straight into a declaration are doc comments and stay.
    """
    cut = last_import.end_byte
    row = last_import.end_point[0]
    next_start = next_decl.start_byte if next_decl is not None else None
    trailing = [
        c for c in comments
        if c.start_byte >= cut and (next_start is None or c.end_byte <= next_start)
    ]

    index = 0
    while index < len(trailing) and trailing[index].start_point[0] == row:
        cut = trailing[index].end_byte
        row = trailing[index].end_point[0]
        index += 1

    run_end = index
    run_row = row
    while run_end < len(trailing) and trailing[run_end].start_point[0] == run_row + 1:
        run_row = trailing[run_end].end_point[0]
        run_end += 1
    if run_end == index:
        return cut

    if run_end < len(trailing):
        following_row = trailing[run_end].start_point[0]
    elif next_decl is not None:
        following_row = next_decl.start_point[0]
    else:
        return trailing[run_end - 1].end_byte
    if following_row > run_row + 1:
        return trailing[run_end - 1].end_byte
    return cut


def parse_source(text: str, filename: str = "") -> GoSource:
    """
    Parse the package clause and import declarations of Go source text.
    Raises ParseError when the file is not valid Go.
    """
    bom = BOM if text.startswith(BOM) else ""
    doc = _Document(text[len(bom):], filename)
    root = doc.root_node

    if root.has_error:
        node = _find_error(root)
        if node.is_missing:
            raise doc.error(node, f"missing {node.type}")
        raise doc.error(node, "syntax error")

    decls = [c for c in root.named_children if c.type != "comment"]
    if not decls or decls[0].type != "package_clause":
        raise doc.error(decls[0] if decls else root, "expected 'package' clause")

    package = decls[0]
    names = [c for c in package.named_children if c.type == "package_identifier"]
    if not names:
        raise doc.error(package, "expected package name")
    package_name = doc.node_text(names[0])

    import_nodes: list[Node] = []
    next_decl = None
    for node in decls[1:]:
        if node.type == "import_declaration":
            if next_decl is not None:
                raise doc.error(node, "imports must appear before other declarations")
            import_nodes.append(node)
        elif next_decl is None:
            next_decl = node

    next_start = next_decl.start_byte if next_decl is not None else None
    section_end = next_start if next_start is not None else len(doc.data)
    comments = list(_comments(root, section_end))

    # A comment on the package line belongs to the header
    header_end = package.end_byte
    first_import = import_nodes[0].start_byte if import_nodes else section_end
    for comment in comments:
        if (comment.start_byte >= header_end and comment.end_byte <= first_import
                and comment.start_point[0] == package.end_point[0]):
            header_end = comment.end_byte

    imports: list[ImportEntry] = []
    for node in import_nodes:
        imports.extend(_import_specs(doc, node))

    if import_nodes:
        body = doc.slice(_body_start(import_nodes[-1], comments, next_decl))
    else:
        body = doc.slice(header_end)

    return GoSource(
        text=text,
        package_name=package_name,
        header=bom + doc.slice(0, header_end).rstrip(),
        imports=tuple(imports),
        import_decls=tuple((n.start_byte, n.end_byte) for n in import_nodes),
        body=body,
        newline=_detect_newline(text),
    )
