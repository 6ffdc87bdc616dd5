"""終端輸出：進度與警告一律寫到 stderr，stdout 留給 Markdown / JSON."""

import sys


def info(msg: str) -> None:
    print(f"   {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    print(f"   ⚠️  {msg}", file=sys.stderr)


def error(msg: str) -> None:
    print(f"❌ {msg}", file=sys.stderr)
