"""Tests for the generated C++ documents."""

from __future__ import annotations

import pytest

from embedgen.encoding import STYLE_ARRAY, STYLE_STRING, decode_literal
from embedgen.models import EncodingOptions, FileRecord, InputFile
from embedgen.registry import Registry, assemble
from embedgen.render import (
    DocumentRenderer,
    c_literal,
    include_guard,
    namespace_parts,
    validate_namespace,
)
from tests._fixtures.tree_builder import TreeBuilder


def _registry(
    tree_builder: TreeBuilder,
    files: dict[str, bytes],
    *,
    namespace: str | None = None,
    style: str = STYLE_STRING,
) -> Registry:
    options = EncodingOptions(style=style)
    records = [
        FileRecord(source=InputFile.from_path(path), options=options)
        for path in tree_builder.write(files)
    ]
    return assemble(records, namespace=namespace)


def _extract_data_lines(source: str, identifier: str, style: str) -> list[str]:
    lines = source.splitlines()
    if style == STYLE_ARRAY:
        start = lines.index(f"const unsigned char data_{identifier}[] = {{")
        end = lines.index("};", start)
        return [line.strip() for line in lines[start + 1 : end]]
    start = lines.index(f"const char data_{identifier}[] =")
    collected: list[str] = []
    for line in lines[start + 1 :]:
        stripped = line.strip()
        if stripped.endswith(";"):
            collected.append(stripped[:-1])
            break
        collected.append(stripped)
    return collected


def test_c_literal_quotes_and_escapes_names() -> None:
    assert c_literal("data.bin") == '"data.bin"'
    assert c_literal('we"ird\\name') == '"we\\"ird\\\\name"'
    assert c_literal("line\nbreak") == '"line\\n""break"'
    assert c_literal("é1") == '"\\xc3\\xa9""1"'


def test_include_guard_uses_namespace_and_base_name() -> None:
    assert include_guard("assets", "embedded_files") == "GENERATED_EMBEDGEN_ASSETS_EMBEDDED_FILES_H"
    assert include_guard(None, "gen-out") == "GENERATED_EMBEDGEN_GEN_OUT_H"
    assert include_guard("a::b", "x") == "GENERATED_EMBEDGEN_A__B_X_H"


def test_validate_namespace() -> None:
    assert validate_namespace(None) is None
    assert validate_namespace("") is None
    assert validate_namespace("assets") == "assets"
    assert validate_namespace("game::assets") == "game::assets"
    with pytest.raises(ValueError):
        validate_namespace("bad-name")
    with pytest.raises(ValueError):
        validate_namespace("a::")
    with pytest.raises(ValueError):
        validate_namespace("assets\n")


def test_namespace_parts_splits_nested_names() -> None:
    assert namespace_parts(None) == []
    assert namespace_parts("assets") == ["assets"]
    assert namespace_parts("game::assets") == ["game", "assets"]


def test_header_declares_count_accessors_and_lookups(tree_builder: TreeBuilder) -> None:
    registry = _registry(tree_builder, {"b.txt": b"b", "a.txt": b"a"}, namespace="assets")

    header = "".join(DocumentRenderer().render_header(registry, "embedded_files"))

    assert header.startswith("// This file was generated by embedgen\n")
    assert "#ifndef GENERATED_EMBEDGEN_ASSETS_EMBEDDED_FILES_H\n" in header
    assert "#define GENERATED_EMBEDGEN_ASSETS_EMBEDDED_FILES_H\n" in header
    assert header.rstrip().endswith("#endif // GENERATED_EMBEDGEN_ASSETS_EMBEDDED_FILES_H")
    assert "namespace assets {\n" in header
    assert "} // namespace assets\n" in header
    assert "constexpr std::size_t embeddedFileCount = 2;\n" in header
    assert "class EmbeddedFileNotFound : public std::runtime_error {" in header
    assert '// file "b.txt"\nconst std::string & get_file_b_txt();\n' in header
    assert header.index("get_file_b_txt") < header.index("get_file_a_txt")
    assert "const std::map<std::string, std::string> & allEmbeddedFiles();\n" in header
    assert "const std::string & mustGetFile(const std::string & fileName);\n" in header


def test_header_without_namespace_has_no_scope(tree_builder: TreeBuilder) -> None:
    registry = _registry(tree_builder, {"a.txt": b"a"})

    header = "".join(DocumentRenderer().render_header(registry, "embedded_files"))

    assert "namespace" not in header
    assert "#ifndef GENERATED_EMBEDGEN_EMBEDDED_FILES_H\n" in header


def test_source_defines_data_and_map_builder(tree_builder: TreeBuilder) -> None:
    registry = _registry(tree_builder, {"data.bin": bytes(range(256))}, namespace="assets")

    source = "".join(DocumentRenderer().render_source(registry, "embedded_files.h"))

    assert '#include "embedded_files.h"\n' in source
    assert 'const char * const name_file_data_bin = "data.bin";\n' in source
    assert "const std::size_t size_file_data_bin = 256;\n" in source
    assert (
        "    result[name_file_data_bin] = std::string(data_file_data_bin, size_file_data_bin);\n"
        in source
    )
    assert "const std::string & get_file_data_bin() {\n" in source
    assert "    throw EmbeddedFileNotFound(fileName);\n" in source
    # The private helpers stay outside the public namespace.
    assert source.index("} // namespace\n") < source.index("namespace assets {")
    assert source.rstrip().endswith("} // namespace assets")


@pytest.mark.parametrize("style", [STYLE_STRING, STYLE_ARRAY])
def test_source_literals_decode_to_file_content(tree_builder: TreeBuilder, style: str) -> None:
    content = bytes(range(256)) + b'\n"quoted"\r\n\t??=\\'
    registry = _registry(tree_builder, {"data.bin": content}, style=style)

    source = "".join(DocumentRenderer().render_source(registry, "embedded_files.h"))

    lines = _extract_data_lines(source, "file_data_bin", style)
    assert decode_literal(lines, style) == content


def test_array_style_uses_unsigned_storage(tree_builder: TreeBuilder) -> None:
    registry = _registry(tree_builder, {"a.bin": b"\xff", "empty.bin": b""}, style=STYLE_ARRAY)

    source = "".join(DocumentRenderer().render_source(registry, "gen.h"))

    assert "const unsigned char data_file_a_bin[] = {\n    0xff,\n};\n" in source
    assert "const unsigned char data_file_empty_bin[] = {\n    0\n};\n" in source
    assert "const std::size_t size_file_empty_bin = 0;\n" in source
    assert "std::string(reinterpret_cast<const char *>(data_file_a_bin), size_file_a_bin)" in source


def test_empty_file_in_string_style_gets_empty_literal(tree_builder: TreeBuilder) -> None:
    registry = _registry(tree_builder, {"empty.bin": b""})

    source = "".join(DocumentRenderer().render_source(registry, "gen.h"))

    assert 'const char data_file_empty_bin[] =\n    "";\n' in source


def test_files_appear_in_discovery_order_in_both_documents(tree_builder: TreeBuilder) -> None:
    registry = _registry(tree_builder, {"z.bin": b"z", "m.bin": b"m", "a.bin": b"a"})
    renderer = DocumentRenderer()

    header = "".join(renderer.render_header(registry, "gen"))
    source = "".join(renderer.render_source(registry, "gen.h"))

    for document in (header, source):
        positions = [document.index(f"get_file_{name}_bin()") for name in ("z", "m", "a")]
        assert positions == sorted(positions)


def test_rendering_is_reproducible(tree_builder: TreeBuilder) -> None:
    registry = _registry(tree_builder, {"a.bin": bytes(range(256)) * 2, "b.bin": b"b"})
    renderer = DocumentRenderer()

    first = "".join(renderer.render_source(registry, "gen.h"))
    second = "".join(DocumentRenderer().render_source(registry, "gen.h"))

    assert first == second


def test_empty_registry_renders_valid_skeleton() -> None:
    registry = assemble([])
    renderer = DocumentRenderer()

    header = "".join(renderer.render_header(registry, "gen"))
    source = "".join(renderer.render_source(registry, "gen.h"))

    assert "constexpr std::size_t embeddedFileCount = 0;\n" in header
    assert "get_file_" not in header
    assert "std::map<std::string, std::string> buildEmbeddedFileMap() {" in source


def test_nested_namespace_opens_one_block_per_name(tree_builder: TreeBuilder) -> None:
    registry = _registry(tree_builder, {"a.txt": b"a"}, namespace="game::assets")
    renderer = DocumentRenderer()

    header = "".join(renderer.render_header(registry, "embedded_files"))
    source = "".join(renderer.render_source(registry, "embedded_files.h"))

    for document in (header, source):
        assert "game::assets" not in document
        assert "namespace game {\nnamespace assets {\n" in document
        assert "} // namespace assets\n} // namespace game\n" in document
    assert "#ifndef GENERATED_EMBEDGEN_GAME__ASSETS_EMBEDDED_FILES_H\n" in header
