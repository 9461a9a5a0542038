"""Tests for Markdown rendering of doc entries."""

from __future__ import annotations

from cnote.doc.extractor import extract_entries
from cnote.doc.renderer import (
    GENERATED_BY,
    compact_signature,
    render,
    render_comment,
    render_entry,
)


def test_param_line_renders_as_list_item() -> None:
    lines = render_comment("@param x the x value").splitlines()
    assert "- **`x`**: the x value" in lines


def test_compact_signature_collapses_whitespace_runs() -> None:
    assert compact_signature("static  int\n\tadd(int a,\n    int b) {") == (
        "static int add(int a, int b) {"
    )


def test_render_entry_section_layout() -> None:
    entry = extract_entries(b"/** Frees the list. */\nvoid list_free(list_t *l);")[0]
    assert render_entry(entry) == (
        "## `void list_free(list_t *l);`\n"
        "\n"
        "Frees the list.\n"
        "\n"
        "---\n"
        "\n"
    )


def test_full_comment_with_tags() -> None:
    comment = (
        "\n"
        " * @brief Pushes a value.\n"
        " *\n"
        " * Grows the buffer when needed.\n"
        " * @param vec   the vector\n"
        " * @param value item to push\n"
        " * @return true on success\n"
        " * @note Not thread safe.\n"
        " "
    )
    assert render_comment(comment) == (
        "Pushes a value.\n"
        "\n"
        "Grows the buffer when needed.\n"
        "\n"
        "- **`vec`**: the vector\n"
        "- **`value`**: item to push\n"
        "- **Returns**: true on success\n"
        "\n"
        "> **Note:** Not thread safe.\n"
    )


def test_list_reopens_after_plain_text() -> None:
    comment = "@param a first\ntext\n@return nothing"
    assert render_comment(comment) == (
        "\n- **`a`**: first\ntext\n\n- **Returns**: nothing\n"
    )


def test_returns_alias_and_directional_param() -> None:
    rendered = render_comment("@param[in] key lookup key\n@returns the value")
    assert "- **`key`**: lookup key" in rendered
    assert "- **Returns**: the value" in rendered


def test_tags_match_as_line_prefixes() -> None:
    assert render_comment("@returnval 0 on success") == "\n- **Returns**: val 0 on success\n"
    assert render_comment("@briefly Adds.") == "ly Adds.\n"


def test_example_block_is_fenced_and_verbatim() -> None:
    comment = (
        "\n"
        " * Sums values.\n"
        " * @example\n"
        " * int total = 0;\n"
        " * for (int i = 0; i < n; i++) {\n"
        " *     total += v[i];\n"
        " * }\n"
        " * @return the sum\n"
    )
    assert render_comment(comment) == (
        "Sums values.\n"
        "\n"
        "```c\n"
        "int total = 0;\n"
        "for (int i = 0; i < n; i++) {\n"
        "    total += v[i];\n"
        "}\n"
        "```\n"
        "\n"
        "- **Returns**: the sum\n"
    )


def test_example_fence_closes_at_end_of_comment() -> None:
    rendered = render_comment("@example\n *   call();\n")
    assert rendered == "\n```c\n  call();\n```\n"


def test_plain_lines_are_kept_one_to_one() -> None:
    comment = "\n * first line\n *   second line   \n * third\n "
    assert render_comment(comment) == "first line\nsecond line\nthird\n"


def test_unknown_tags_render_as_plain_text() -> None:
    assert render_comment("@see other_fn") == "@see other_fn\n"


def test_render_document_concatenates_entries_in_order() -> None:
    buffer = b"/** One. */ int one;\n/** Two. */ int two;\n"
    document = render(extract_entries(buffer, path="a.h"), "API Documentation", preamble=GENERATED_BY)

    assert document.startswith("# API Documentation\n\nGenerated by `cnote`.\n\n## `int one;`")
    assert document.index("## `int one;`") < document.index("## `int two;`")
    assert document.count("\n---\n") == 2
    assert "*Source:" not in document


def test_render_document_can_show_source_path() -> None:
    entries = extract_entries(b"/** One. */ int one;", path="inc/one.h")
    document = render(entries, "API", show_source=True)
    assert "## `int one;`\n\n*Source: inc/one.h*\n\nOne.\n" in document
