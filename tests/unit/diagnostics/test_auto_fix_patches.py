from __future__ import annotations

from codebase_indexer.diagnostics.autofix import auto_fix


def test_console_log_is_commented_out() -> None:
    content = (
        "export function save(data: string) {\n  console.log(data);\n  return data.trim();\n}\n"
    )
    result = auto_fix(content)

    assert result.fix_count == 1
    assert result.fixes == ("Commented out console.log statements",)
    assert result.fixed.split("\n")[1] == "  // console.log(data);"
    assert result.fixed.split("\n")[2] == "  return data.trim();"


def test_missing_alt_attribute_is_added() -> None:
    result = auto_fix('<img src="a.png">\n<img src="b.png" />')

    assert result.fixed == '<img alt="" src="a.png">\n<img alt="" src="b.png" />'
    assert result.fixes == ("Added missing alt attributes to images",)


def test_both_fix_categories_are_counted_once_each() -> None:
    result = auto_fix('console.log(1);\n<img src="a.png">\nconsole.log(2);')
    assert result.fix_count == 2


def test_clean_content_is_unchanged() -> None:
    content = '<img alt="logo" src="a.png">\nreturn 1;\n'
    result = auto_fix(content)

    assert result.fixed == content
    assert result.fix_count == 0
    assert result.fixes == ()
