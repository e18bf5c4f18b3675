"""Tests for the canonical region rewriter."""

import re

import pytest

from sfclint.sfc.blocks import split_file
from sfclint.sfc.contracts import MANUAL_NOTE
from sfclint.sfc.rewriter import rewrite, rewrite_logic, rewrite_text

FRAGMENT = (
    "const count = ref(0)\n"
    "import { ref } from 'vue'\n"
    "definePageMeta({ layout: 'admin' })\n"
)

EXPECTED_FRAGMENT = """\
import { ref } from 'vue'

/* region Page Meta */
definePageMeta({ layout: 'admin' })
/* endregion */

/* region Props */
// export type UserCardProps = {
//   sample: string
// }
// const { sample } = defineProps<UserCardProps>()
/* endregion */

/* region Emits */
// export type UserCardEmits = {
//   change: [id: number]
// }
// const emit = defineEmits<UserCardEmits>()
/* endregion */

/* region Slots */
// const slots = defineSlots<{ default(props: { msg: string }): any }>()
/* endregion */

/* region Logic & State */
const count = ref(0)
/* endregion */
"""


def _markers(text: str) -> list[str]:
    return re.findall(r"/\* region (.+?) \*/", text)


# ============================================================================
# Ordering
# ============================================================================


def test_fragment_is_rewritten_in_canonical_order():
    """Statements are bucketed and empty regions get placeholders."""
    assert rewrite_text(FRAGMENT, "user-card.ts") == EXPECTED_FRAGMENT


def test_regions_follow_canonical_order():
    """Markers always appear in canonical order, whatever the input order."""
    code = (
        "/* region Logic & State */\nconst a = 1\n/* endregion */\n"
        "/* region Props */\nconst { id } = defineProps<XProps>()\n/* endregion */\n"
    )
    out = rewrite_text(code, "x.ts")
    assert _markers(out) == ["Page Meta", "Props", "Emits", "Slots", "Logic & State"]


def test_source_order_kept_within_region():
    """Statements of one region keep their relative order."""
    out = rewrite_text("const b = 2\nimport x from 'x'\nconst a = 1\n", "x.ts")
    assert out.index("const b = 2") < out.index("const a = 1")
    assert out.startswith("import x from 'x'\n")


def test_full_file_expected_output(read_fixture):
    """A full component is rewritten with template and style untouched."""
    out = rewrite_text(read_fixture("user-card.vue"), "user-card.vue")
    assert out == read_fixture("user-card.expected.vue")


# ============================================================================
# Idempotence and data preservation
# ============================================================================


@pytest.mark.parametrize(
    "name",
    ["user-card.vue", "user-card.expected.vue", "settings-page.vue", "unterminated.vue"],
)
def test_rewrite_is_idempotent(read_fixture, name):
    """Rewriting the output again yields the same text."""
    once = rewrite_text(read_fixture(name), name)
    assert rewrite_text(once, name) == once


def test_rewrite_fragment_is_idempotent():
    """Fragments are idempotent too."""
    once = rewrite_text(FRAGMENT, "user-card.ts")
    assert rewrite_text(once, "user-card.ts") == once


def test_no_statement_or_comment_is_lost():
    """Every statement and user comment survives the rewrite."""
    code = (
        "// about the counter\n"
        "const count = ref(0)\n"
        "/* block note */\n"
        "function inc() { count.value++ }\n"
        "import { ref } from 'vue'\n"
        "// trailing thoughts\n"
    )
    out = rewrite_text(code, "counter.ts")
    for piece in (
        "// about the counter",
        "const count = ref(0)",
        "/* block note */",
        "function inc() { count.value++ }",
        "import { ref } from 'vue'",
        "// trailing thoughts",
    ):
        assert piece in out


def test_comment_stays_with_statement():
    """A leading comment moves together with its statement."""
    out = rewrite_text("const a = 1\n// page setup\ndefinePageMeta({ layout: 'x' })\n", "x.ts")
    assert "// page setup\ndefinePageMeta({ layout: 'x' })" in out


def test_settings_page_annotated(read_fixture):
    """Unsafe contracts are annotated; other content is still organized."""
    out = rewrite_text(read_fixture("settings-page.vue"), "settings-page.vue")
    assert out.count(MANUAL_NOTE) == 1
    assert "/* region Page Meta */\ndefinePageMeta({ layout: 'admin' })\n/* endregion */" in out
    assert "const settings = useSettings(props.userId)" in out
    assert out.rstrip().endswith('<SettingsForm :settings="settings" />\n</template>')


# ============================================================================
# Passthrough
# ============================================================================


def test_malformed_file_is_unchanged(read_fixture):
    """An unterminated block leaves the file byte-identical."""
    text = read_fixture("unterminated.vue")
    assert rewrite_text(text, "unterminated.vue") == text


def test_file_without_setup_script_is_unchanged():
    """Only <script setup> blocks are rewritten."""
    text = '<script lang="ts">\nexport default {}\n</script>\n'
    assert rewrite(split_file(text, "a.vue")) == text


def test_rewrite_logic_returns_text():
    """rewrite_logic works on a bare body and ends with a newline."""
    out = rewrite_logic("const a = 1\n", "A")
    assert out is not None
    assert out.endswith("/* region Logic & State */\nconst a = 1\n/* endregion */\n")
