"""Shared fixtures for core unit tests"""

import pytest

from mdxdoc.core.markdown import make_parser


SAMPLE_MDX = """\
# Heading 1

A paragraph with **bold** text.

<YouTube id="abc123" />

<Callout type="warning">
Be careful

- item one
- item two
</Callout>

```python
print("hello")
```

---

Footer paragraph.
"""

SAMPLE_FM_MDX = """\
---
title: Test Doc
slug: test-doc
tags: [a, b]
---

# Title

Body content.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser()


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MDX)


@pytest.fixture(name="sample_mdx")
def sample_mdx_fixture():
    return SAMPLE_MDX


@pytest.fixture(name="sample_fm_mdx")
def sample_fm_mdx_fixture():
    return SAMPLE_FM_MDX
