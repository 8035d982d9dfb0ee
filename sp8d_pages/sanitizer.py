"""Strip page-generator artifacts from rendered HTML output.

The static export appends a mis-encoded ``" – Nextra"`` suffix to every page
title. :class:`OutputSanitizer` walks the export directory after rendering and
rewrites each ``.html`` file in place with that suffix removed. The pass is
idempotent: once a marker is gone it cannot reappear, so rerunning the
sanitizer over clean output leaves every byte unchanged.

Example
-------
>>> sanitizer = OutputSanitizer()
>>> sanitizer.sanitize_text("<title>Install SP8D â€“ Nextra</title>")
'<title>Install SP8D</title>'
>>> sanitizer.run(Path("out"))  # doctest: +SKIP
[PosixPath('out/index.html'), ...]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
from pathlib import Path

from ._constants import HTML_SUFFIX, NEXTRA_TITLE_MARKER


@dc.dataclass(frozen=True, slots=True)
class ReplacementRule:
    """One substitution applied to every matching output file.

    Attributes
    ----------
    pattern : str
        Literal text to replace, or a regular expression when ``regex`` is set.
    replacement : str
        Replacement text; empty by default so matches are removed.
    regex : bool
        Interpret ``pattern`` as a regular expression.
    """

    pattern: str
    replacement: str = ""
    regex: bool = False

    def __post_init__(self) -> None:
        if not self.pattern:
            msg = "Replacement rule pattern must not be empty."
            raise ValueError(msg)
        if self.regex:
            try:
                re.compile(self.pattern).sub(self.replacement, "")
            except re.error as exc:
                msg = f"Invalid replacement rule {self.pattern!r}: {exc}"
                raise ValueError(msg) from exc

    def apply(self, text: str) -> str:
        if self.regex:
            return re.sub(self.pattern, self.replacement, text)
        return text.replace(self.pattern, self.replacement)


DEFAULT_RULES: tuple[ReplacementRule, ...] = (ReplacementRule(NEXTRA_TITLE_MARKER),)


class OutputSanitizer:
    """Rewrite generated files in place, removing configured artifacts."""

    def __init__(
        self,
        rules: cabc.Sequence[ReplacementRule] = DEFAULT_RULES,
        *,
        suffix: str = HTML_SUFFIX,
    ) -> None:
        self.rules = tuple(rules)
        self.suffix = suffix

    def sanitize_text(self, text: str) -> str:
        """Apply every rule, in order, to ``text``."""
        for rule in self.rules:
            text = rule.apply(text)
        return text

    def run(self, root: Path) -> list[Path]:
        """Sanitize every matching file under ``root``.

        Parameters
        ----------
        root : Path
            Build output directory produced by the renderer.

        Returns
        -------
        list[Path]
            Patched files in depth-first traversal order.

        Raises
        ------
        FileNotFoundError
            If ``root`` does not exist.
        NotADirectoryError
            If ``root`` is not a directory.
        OSError
            On any read or write failure; the remaining files are not visited.
        UnicodeDecodeError
            If a matching file is not valid UTF-8.
        """
        if not root.exists():
            msg = f"Output directory '{root}' not found."
            raise FileNotFoundError(msg)
        if not root.is_dir():
            msg = f"Output path '{root}' is not a directory."
            raise NotADirectoryError(msg)
        patched: list[Path] = []
        for path in self.iter_targets(root):
            self.patch_file(path)
            patched.append(path)
        return patched

    def iter_targets(self, root: Path) -> cabc.Iterator[Path]:
        """Yield matching files depth-first, entries in sorted name order."""
        pending: list[cabc.Iterator[Path]] = [iter(sorted(root.iterdir()))]
        while pending:
            entry = next(pending[-1], None)
            if entry is None:
                pending.pop()
                continue
            if entry.is_dir():
                pending.append(iter(sorted(entry.iterdir())))
            elif entry.name.endswith(self.suffix):
                yield entry

    def patch_file(self, path: Path) -> None:
        """Rewrite ``path`` with every rule applied, keeping its line endings."""
        with path.open("r", encoding="utf-8", newline="") as handle:
            content = handle.read()
        cleaned = self.sanitize_text(content)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(cleaned)


__all__ = ["DEFAULT_RULES", "OutputSanitizer", "ReplacementRule"]
