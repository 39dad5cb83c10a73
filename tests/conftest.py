"""Root test configuration: a small blog content tree shared by all tests"""

import os
from pathlib import Path

import pytest


ABOUT_MD = """\
---
layout: page
title: About
---

I write about .NET performance and networking.
"""

HELLO_MD = """\
---
title: Hello, world
---

First post.
"""

PIPELINES_MD = """\
---
title: A look at System.IO.Pipelines
published: false
---

Pipelines make buffer management someone else's problem.

## Reading

```csharp
var result = await reader.ReadAsync();
reader.AdvanceTo(result.Buffer.End);
```

The same loop in a scripting language:

```lua
local chunk = reader:read()
```
"""


@pytest.fixture(name="blog_dir")
def blog_dir_fixture(tmp_path) -> Path:
    """Content root with a page, a published post, a draft, and non-content files."""
    root = tmp_path / "blog"
    (root / "posts").mkdir(parents=True)
    (root / "about.md").write_text(ABOUT_MD, encoding="utf-8")
    (root / "posts" / "2018-05-01-hello.md").write_text(HELLO_MD, encoding="utf-8")
    (root / "posts" / "2018-07-09-pipelines.md").write_text(PIPELINES_MD, encoding="utf-8")
    (root / "README.md").write_text("# Repo readme\n", encoding="utf-8")
    (root / "notes.txt").write_text("not markdown\n", encoding="utf-8")
    (root / ".git").mkdir()
    (root / ".git" / "HEAD.md").write_text("ignored\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MDBLOG_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("MDBLOG_"):
            monkeypatch.delenv(name)
