"""Keyword-based highlighting for languages without a full grammar.

Highlights are reported as ``(start_byte, end_byte, capture_name)`` tuples,
with offsets into the UTF-8 encoding of the source.
"""

from __future__ import annotations

from dataclasses import dataclass

_SQL_KEYWORDS = frozenset(
    """
    SELECT FROM WHERE INSERT INTO VALUES UPDATE SET DELETE CREATE DROP ALTER
    TABLE INDEX VIEW DATABASE JOIN INNER LEFT RIGHT OUTER CROSS ON AND OR NOT
    IN IS NULL AS ORDER BY GROUP HAVING LIMIT OFFSET UNION ALL DISTINCT BETWEEN
    LIKE EXISTS CASE WHEN THEN ELSE END BEGIN COMMIT ROLLBACK TRANSACTION
    PRIMARY KEY FOREIGN REFERENCES CONSTRAINT DEFAULT CHECK UNIQUE IF REPLACE
    TRIGGER FUNCTION PROCEDURE RETURNS RETURN DECLARE CURSOR FETCH OPEN CLOSE
    WITH RECURSIVE TEMPORARY TEMP CASCADE RESTRICT ASC DESC EXPLAIN ANALYZE
    GRANT REVOKE SCHEMA INT INTEGER BIGINT SMALLINT FLOAT DOUBLE DECIMAL
    NUMERIC CHAR VARCHAR TEXT BOOLEAN BOOL DATE TIME TIMESTAMP SERIAL
    AUTOINCREMENT TRUE FALSE COUNT SUM AVG MIN MAX COALESCE CAST ADD COLUMN
    RENAME TO TRUNCATE EXCEPT INTERSECT
    """.split()
)

_DOCKERFILE_KEYWORDS = frozenset(
    """
    FROM RUN CMD LABEL MAINTAINER EXPOSE ENV ADD COPY ENTRYPOINT VOLUME USER
    WORKDIR ARG ONBUILD STOPSIGNAL HEALTHCHECK SHELL AS
    """.split()
)


@dataclass(frozen=True)
class SimpleRules:
    """Lexical rules for a simple highlighter."""

    keywords: frozenset[str]
    line_comment: str | None = None
    block_comment: tuple[str, str] | None = None
    string_delimiters: str = ""
    case_insensitive_keywords: bool = False

    def is_keyword(self, word: str) -> bool:
        """Return whether ``word`` is one of the keywords."""
        if self.case_insensitive_keywords:
            return word.upper() in self.keywords
        return word in self.keywords


def simple_rules_for_language(name: str) -> SimpleRules | None:
    """Return the rules for a language, or None if it has no simple rules."""
    if name == "sql":
        return SimpleRules(
            keywords=_SQL_KEYWORDS,
            line_comment="--",
            block_comment=("/*", "*/"),
            string_delimiters="'\"",
            case_insensitive_keywords=True,
        )
    if name == "dockerfile":
        return SimpleRules(
            keywords=_DOCKERFILE_KEYWORDS,
            line_comment="#",
            block_comment=None,
            string_delimiters="'\"",
            case_insensitive_keywords=False,
        )
    return None


def _is_ident_start(byte: int) -> bool:
    return (0x41 <= byte <= 0x5A) or (0x61 <= byte <= 0x7A) or byte == 0x5F


def _is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


def _is_ident_char(byte: int) -> bool:
    return _is_ident_start(byte) or _is_digit(byte)


def compute_simple_highlights(
    rules: SimpleRules, source: str
) -> list[tuple[int, int, str]]:
    """Scan ``source`` and return comment, string, number and keyword spans."""
    data = source.encode("utf-8")
    length = len(data)
    delimiters = {ord(c) for c in rules.string_delimiters}
    block = (
        (rules.block_comment[0].encode(), rules.block_comment[1].encode())
        if rules.block_comment
        else None
    )
    line_prefix = rules.line_comment.encode() if rules.line_comment else None

    highlights: list[tuple[int, int, str]] = []
    i = 0
    while i < length:
        if block is not None and data.startswith(block[0], i):
            opener, closer = block
            start = i
            i += len(opener)
            while i < length and not data.startswith(closer, i):
                i += 1
            if i < length:
                i += len(closer)
            highlights.append((start, i, "comment"))
            continue

        if line_prefix is not None and data.startswith(line_prefix, i):
            start = i
            end = data.find(b"\n", i)
            i = length if end == -1 else end
            highlights.append((start, i, "comment"))
            continue

        byte = data[i]

        if byte in delimiters:
            start = i
            i += 1
            while i < length and data[i] != byte:
                if data[i] == 0x5C:
                    i += 1
                i += 1
            if i < length:
                i += 1
            i = min(i, length)
            highlights.append((start, i, "string"))
            continue

        if _is_digit(byte):
            start = i
            while i < length and (_is_digit(data[i]) or data[i] == 0x2E):
                i += 1
            if start == 0 or not _is_ident_char(data[start - 1]):
                highlights.append((start, i, "number"))
            continue

        if _is_ident_start(byte):
            start = i
            while i < length and _is_ident_char(data[i]):
                i += 1
            word = data[start:i].decode("ascii")
            if rules.is_keyword(word):
                highlights.append((start, i, "keyword"))
            continue

        i += 1

    return highlights