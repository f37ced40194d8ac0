"""Shared hypothesis strategies for pagesmith property-based testing.

Strategies generate template inputs at three levels:

- **Text**: literal text that cannot contain tags
- **Values**: JSON-like context values
- **Templates**: well-formed templates with arbitrarily nested blocks

Individual test modules compose them into property-specific strategies.
"""

from __future__ import annotations

from hypothesis import strategies as st

# ---------------------------------------------------------------------------
# Text strategies
# ---------------------------------------------------------------------------

# Literal text without braces, so it can never form a tag.
plain_text = st.text(
    alphabet=st.characters(
        exclude_categories=("Cs",),  # no surrogates
        exclude_characters="{}",
    ),
    min_size=0,
    max_size=200,
)

# Anything at all, including broken tags.
arbitrary_template_source = st.lists(
    st.one_of(
        st.sampled_from(["{{", "}}", "{{#if ", "{{#each ", "{{/if}}", "{{/each}}", "{{else}}", "{{> "]),
        st.characters(exclude_categories=("Cs",)),
    ),
    max_size=60,
).map("".join)

identifier = st.from_regex(r"[a-z_][a-z0-9_]{0,12}", fullmatch=True)

# ---------------------------------------------------------------------------
# Value strategies
# ---------------------------------------------------------------------------

scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-10_000, max_value=10_000),
    st.text(alphabet="abcxyz <>&", max_size=10),
)

json_values = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(identifier, children, max_size=4),
    ),
    max_leaves=10,
)

# ---------------------------------------------------------------------------
# Template strategies
# ---------------------------------------------------------------------------

FLAGS = ("a", "b", "c")

_literal = st.text(alphabet="xyz <>/-", max_size=6)
_flag = st.sampled_from(FLAGS)


def _open(kind: str, path: str) -> str:
    return "{{#" + kind + " " + path + "}}"


def _blocks(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    return st.one_of(
        st.tuples(_flag, children).map(lambda t: _open("if", t[0]) + t[1] + "{{/if}}"),
        st.tuples(_flag, children, children).map(
            lambda t: _open("if", t[0]) + t[1] + "{{else}}" + t[2] + "{{/if}}"
        ),
        st.tuples(_flag, children).map(lambda t: _open("unless", t[0]) + t[1] + "{{/unless}}"),
        children.map(lambda body: _open("each", "items") + body + "{{/each}}"),
        st.lists(children, min_size=2, max_size=3).map("".join),
    )


# Balanced templates: every opener has its closer, blocks nest arbitrarily.
balanced_template = st.recursive(_literal, _blocks, max_leaves=12)

flag_context = st.fixed_dictionaries(
    {
        "a": st.booleans(),
        "b": st.booleans(),
        "c": st.booleans(),
        "items": st.lists(st.integers(min_value=0, max_value=9), max_size=3),
    }
)
