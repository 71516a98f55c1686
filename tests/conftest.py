"""Shared fixtures: throwaway git repositories and a stand-in formatter."""

import shutil
import subprocess
import sys
from pathlib import Path

import pytest
from fmtbot.formatters.resolve import FormatterSpec

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

# Strips trailing whitespace in place; exits 3 on a file containing FAIL.
STRIP_FORMATTER = """\
import sys
from pathlib import Path

p = Path(sys.argv[-1])
text = p.read_text()
if "FAIL" in text:
    sys.exit(3)
p.write_text("".join(line.rstrip() + "\\n" for line in text.splitlines()))
"""


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=str(cwd), capture_output=True, text=True, check=True)
    return result.stdout


def init_repo(path: Path, files: dict[str, str]) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "-q")
    git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    git(path, "config", "user.name", "Test User")
    git(path, "config", "user.email", "test@example.com")
    git(path, "config", "commit.gpgsign", "false")
    for name, content in files.items():
        f = path / name
        f.parent.mkdir(parents=True, exist_ok=True)
        f.write_text(content)
    git(path, "add", "-A")
    git(path, "commit", "-q", "-m", "initial")
    return path


def commit_count(path: Path) -> int:
    return int(git(path, "rev-list", "--count", "HEAD").strip())


@pytest.fixture
def strip_formatter(tmp_path: Path) -> FormatterSpec:
    script = tmp_path / "strip_fmt.py"
    script.write_text(STRIP_FORMATTER)
    return FormatterSpec(name="strip", binary=Path(sys.executable), args=(str(script),))


@pytest.fixture
def upstream(tmp_path: Path) -> Path:
    """A bare 'remote' repository with one commit on main."""
    src = init_repo(
        tmp_path / "seed",
        {
            "main.c": "int main(void) {   \n  return 0;\n}\n",
            "lib/util.h": "#pragma once\n",
            "tools/build.py": "print('hi')   \n",
            "README.md": "readme   \n",
        },
    )
    bare = tmp_path / "upstream.git"
    subprocess.run(["git", "clone", "-q", "--bare", str(src), str(bare)], check=True)
    return bare
