"""
Tests for marked block rendering and upsert.
"""

import textwrap

import pytest

from shellenv.core.models import ShellDialect
from shellenv.core.services.assignment_scan import has_effective_assignment
from shellenv.core.services.block_codec import (
    block_markers,
    has_block,
    render_block,
    upsert_block,
)

NAME = "Z_AI_API_KEY"
START = "# shellenv: Z_AI_API_KEY env start"
END = "# shellenv: Z_AI_API_KEY env end"


@pytest.fixture
def block():
    return render_block(NAME, "abc123", ShellDialect.ZSH)


# Contents the upsert must reach a fixed point on.
_CONTENTS = [
    "",
    "\n",
    "   \n\n",
    "export PATH=/bin\n",
    "export PATH=/bin",
    "alias ll='ls -l'\n\n\n\n",
    f"{START}\nexport {NAME}=\"old\"\n{END}\n",
    f"before\n{START}\nexport {NAME}=\"old\"\n{END}\nafter\n",
    f"before\n\n\n{START}\nstale\n{END}\n\n\nafter\n\n",
    f"{START}\norphan start, no end\n",
    f"{END}\norphan end first\n{START}\nx\n{END}\n",
    f"a\n{START}\none\n{END}\nb\n{START}\ntwo\n{END}\nc\n",
    "line one\r\nline two\r\n",
]


class TestRender:
    """Tests for rendering a marked block."""

    def test_posix(self, block):
        """POSIX blocks use export syntax between the markers."""
        assert block.start_marker == START
        assert block.end_marker == END
        assert block.body_line == 'export Z_AI_API_KEY="abc123"'

    def test_text_is_three_lines(self, block):
        assert block.text == f'{START}\nexport Z_AI_API_KEY="abc123"\n{END}'

    @pytest.mark.parametrize("dialect", [ShellDialect.POWERSHELL, ShellDialect.POWERSHELL_CORE])
    def test_powershell(self, dialect):
        """PowerShell blocks use $env: syntax."""
        b = render_block(NAME, "xyz789", dialect)
        assert b.body_line == '$env:Z_AI_API_KEY="xyz789"'
        assert b.start_marker.startswith("# ")
        assert "export" not in b.text

    def test_unknown_renders_posix(self):
        """Unknown dialects render POSIX syntax."""
        b = render_block(NAME, "v", ShellDialect.UNKNOWN)
        assert b.body_line == 'export Z_AI_API_KEY="v"'

    def test_tool_and_label(self):
        """Markers carry the tool name and label."""
        start, end = block_markers(NAME, ShellDialect.BASH, tool="claude-sneakpeek", label="Z.ai")
        assert start == "# claude-sneakpeek: Z.ai env start"
        assert end == "# claude-sneakpeek: Z.ai env end"

    def test_value_embedded_verbatim(self):
        """Values are not escaped."""
        b = render_block(NAME, "a b$c", ShellDialect.ZSH)
        assert b.body_line == 'export Z_AI_API_KEY="a b$c"'


class TestUpsert:
    """Tests for inserting or replacing a marked block."""

    def test_append_to_empty(self, block):
        """An empty profile becomes just the block."""
        assert upsert_block("", block) == block.text + "\n"

    def test_append_separated_by_one_blank_line(self, block):
        """Trailing blank lines collapse to one separator."""
        result = upsert_block("export PATH=/bin\n\n\n", block)
        assert result == f"export PATH=/bin\n\n{block.text}\n"

    def test_replace_in_place(self, block):
        """An existing block is replaced where it stands."""
        content = textwrap.dedent(f"""\
            export PATH=/bin
            {START}
            export Z_AI_API_KEY="old"
            {END}
            alias ll='ls -l'
        """)
        result = upsert_block(content, block)
        assert result == (
            "export PATH=/bin\n\n"
            f"{block.text}\n\n"
            "alias ll='ls -l'\n"
        )
        assert '"old"' not in result

    def test_unrelated_content_preserved(self, block):
        """User content before the block is kept."""
        content = "# my settings\nsetopt autocd\nexport EDITOR=vim\n"
        result = upsert_block(content, block)
        assert result.startswith(content.rstrip())

    def test_duplicate_blocks_collapse(self, block):
        """Extra copies of the block are removed."""
        content = f"a\n{START}\none\n{END}\nb\n{START}\ntwo\n{END}\nc\n"
        result = upsert_block(content, block)
        assert result.count(START) == 1
        assert result.count(END) == 1
        assert "one" not in result and "two" not in result
        assert result == f"a\n\n{block.text}\n\nb\n\nc\n"

    def test_orphan_start_does_not_swallow_text(self, block):
        """A start marker without an end does not eat user text."""
        content = f"{START}\nkeep me\n"
        result = upsert_block(content, block)
        assert "keep me" in result
        assert result.endswith(block.text + "\n")

    def test_other_variable_block_untouched(self, block):
        """Blocks for other variables are left alone."""
        other = render_block("OTHER_KEY", "zzz", ShellDialect.ZSH)
        content = upsert_block("", other)
        result = upsert_block(content, block)
        assert other.text in result
        assert block.text in result

    @pytest.mark.parametrize("content", _CONTENTS)
    def test_idempotent(self, block, content):
        """Upserting twice equals upserting once."""
        once = upsert_block(content, block)
        assert upsert_block(once, block) == once

    @pytest.mark.parametrize("content", _CONTENTS)
    def test_single_block_after_upsert(self, block, content):
        """Exactly one block remains after an upsert."""
        result = upsert_block(content, block)
        assert result.count(block.body_line) == 1
        assert has_block(result, block.start_marker, block.end_marker)

    @pytest.mark.parametrize("value", ["abc123", "sk-ant-api03-XYZ", "with space", "x"])
    @pytest.mark.parametrize("dialect", list(ShellDialect))
    def test_render_upsert_scan(self, value, dialect):
        """Whatever is written is recognized as an effective assignment."""
        b = render_block(NAME, value, dialect)
        result = upsert_block("export PATH=/bin\n", b)
        assert has_effective_assignment(result, NAME, dialect)


class TestHasBlock:
    """Tests for detecting a complete marked block."""

    def test_absent(self):
        assert has_block("export X=1\n", START, END) is False

    def test_start_only(self):
        assert has_block(f"{START}\n", START, END) is False

    def test_end_before_start(self):
        """An end marker before the start is not a block."""
        assert has_block(f"{END}\n{START}\n", START, END) is False
