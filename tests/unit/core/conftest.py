"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_TEXT = """\
# Project notes

Some opening text.

## Tasks

- [x] write parser
- [ ] write migration
- loose idea
* another idea

1. first
2. second

> quoted line

```python
def main():

    return 1
```

---
"""

SAMPLE_FM_TEXT = """\
---
title: Reading list
tags: [books, later]
---

# Not the title

- Dune
"""


@pytest.fixture(name="sample_text")
def sample_text_fixture():
    return SAMPLE_TEXT


@pytest.fixture(name="entry_id")
def entry_id_fixture():
    return "entry-1"


@pytest.fixture(name="fm_file")
def fm_file_fixture(tmp_path):
    f = tmp_path / "reading.md"
    f.write_text(SAMPLE_FM_TEXT)
    return f
