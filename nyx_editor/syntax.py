"""Per-buffer syntax state: lexing, cached highlight spans and a dirty flag.

Languages with a built-in grammar are scanned into a full token stream (the
``tree``), from which highlight spans are taken. Languages that only have
simple keyword rules are highlighted by :mod:`nyx_editor.simple` and have no
token stream. All offsets are byte offsets into the UTF-8 encoded source.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from itertools import accumulate

from .languages import language_for_extension
from .simple import SimpleRules, compute_simple_highlights, simple_rules_for_language

Span = tuple[int, int, str]

_IDENTIFIER = r"[^\W\d]\w*"
_NUMBER = r"(?:0[xXbBoO][0-9a-fA-F_]+|\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d+)?)\w*"
_OPERATOR = r"[+\-*/%=<>!&|^~?@]+"
_PUNCTUATION = r"[()\[\]{};,.:]"
_CALL = re.compile(r"[ \t]*\(")

_CHAR_LITERAL = (r"'(?:\\.|[^'\\\n])'", "string")
_C_STYLE = (("/*", "*/"),)


def _words(text: str) -> frozenset[str]:
    return frozenset(text.split())


class UnsupportedLanguageError(ValueError):
    """Raised when no highlighting is available for a language."""


@dataclass(frozen=True)
class _Grammar:
    """Lexical description of a language with a built-in grammar."""

    keywords: frozenset[str] = frozenset()
    types: frozenset[str] = frozenset()
    function_keywords: frozenset[str] = frozenset()
    type_keywords: frozenset[str] = frozenset()
    line_comments: tuple[str, ...] = ()
    block_comments: tuple[tuple[str, str], ...] = ()
    quotes: str = "\"'"
    long_strings: tuple[tuple[str, str], ...] = ()
    extra: tuple[tuple[str, str], ...] = ()
    identifier: str = _IDENTIFIER
    capitalized_types: bool = False
    calls_are_functions: bool = True

    @cached_property
    def scanner(self) -> tuple[re.Pattern[str], tuple[str, ...]]:
        """Compiled alternation of all token patterns and the kind of each."""
        rules: list[tuple[str, str]] = list(self.extra)
        rules += [
            (rf"{re.escape(o)}[\s\S]*?(?:{re.escape(c)}|\Z)", "comment")
            for o, c in self.block_comments
        ]
        rules += [(rf"{re.escape(p)}[^\n]*", "comment") for p in self.line_comments]
        rules += [
            (rf"{re.escape(o)}[\s\S]*?(?:{re.escape(c)}|\Z)", "string")
            for o, c in self.long_strings
        ]
        for quote in self.quotes:
            q = re.escape(quote)
            rules.append((rf"{q}(?:\\[\s\S]|[^{q}\\\n])*{q}?", "string"))
        rules += [
            (_NUMBER, "number"),
            (self.identifier, "identifier"),
            (_OPERATOR, "operator"),
            (_PUNCTUATION, "punctuation"),
        ]
        pattern = "|".join(f"(?P<g{i}>{p})" for i, (p, _) in enumerate(rules))
        return re.compile(pattern), tuple(kind for _, kind in rules)

    def classify(self, word: str, previous: str | None, source: str, end: int) -> str:
        if word in self.keywords:
            return "keyword"
        if previous in self.function_keywords:
            return "function"
        if previous in self.type_keywords:
            return "type"
        if word in self.types or (self.capitalized_types and word[0].isupper()):
            return "type"
        if self.calls_are_functions and _CALL.match(source, end):
            return "function"
        return "identifier"

    def tokens(self, source: str) -> list[tuple[int, int, str]]:
        """Split ``source`` into ``(start_char, end_char, kind)`` tokens."""
        pattern, kinds = self.scanner
        result: list[tuple[int, int, str]] = []
        previous: str | None = None
        for match in pattern.finditer(source):
            kind = kinds[int(match.lastgroup[1:])]
            start, end = match.span()
            if kind == "identifier":
                word = match.group()
                kind = self.classify(word, previous, source, end)
                previous = word if kind == "keyword" else None
            elif kind != "comment":
                previous = None
            result.append((start, end, kind))
        return result


_JS_KEYWORDS = """
    break case catch class const continue debugger default delete do else export
    extends finally for from function if import in instanceof let new of return
    static super switch this throw try typeof var void while with yield async
    await true false null undefined get set
"""
_C_KEYWORDS = """
    auto break case const continue default do else enum extern for goto if
    inline register restrict return signed sizeof static struct switch typedef
    union unsigned volatile while NULL true false
"""
_C_TYPES = "char double float int long short void size_t bool"
_PREPROCESSOR = (r"#[ \t]*[A-Za-z_]\w*", "keyword")
_HTML_RULES = (
    (r"(?i:<!DOCTYPE[^>]*>?)", "keyword"),
    (r"</?[A-Za-z][\w:-]*", "keyword"),
    (r"/?>", "punctuation"),
)

_GRAMMARS: dict[str, _Grammar] = {
    "rust": _Grammar(
        keywords=_words("""
            as async await break const continue crate dyn else enum extern false
            fn for if impl in let loop match mod move mut pub ref return self Self
            static struct super trait true type union unsafe use where while yield
            macro_rules
        """),
        types=_words("""
            i8 i16 i32 i64 i128 isize u8 u16 u32 u64 u128 usize f32 f64 bool char str
        """),
        function_keywords=_words("fn"),
        type_keywords=_words("struct enum trait union type"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        quotes='"',
        extra=(_CHAR_LITERAL, (r"'[^\W\d]\w*", "label")),
        capitalized_types=True,
    ),
    "json": _Grammar(
        keywords=_words("true false null"), quotes='"', calls_are_functions=False
    ),
    "python": _Grammar(
        keywords=_words("""
            False None True and as assert async await break class continue def del
            elif else except finally for from global if import in is lambda
            nonlocal not or pass raise return try while with yield match case
        """),
        types=_words("int float str bool bytes list dict set tuple object"),
        function_keywords=_words("def"),
        type_keywords=_words("class"),
        line_comments=("#",),
        long_strings=(('"""', '"""'), ("'''", "'''")),
        extra=((r"@[^\W\d][\w.]*", "attribute"),),
        capitalized_types=True,
    ),
    "javascript": _Grammar(
        keywords=_words(_JS_KEYWORDS),
        function_keywords=_words("function"),
        type_keywords=_words("class"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        long_strings=(("`", "`"),),
        capitalized_types=True,
    ),
    "typescript": _Grammar(
        keywords=_words(_JS_KEYWORDS + """
            interface type enum implements namespace declare abstract private
            protected public readonly keyof as is infer module
        """),
        types=_words("string number boolean any void never unknown object symbol bigint"),
        function_keywords=_words("function"),
        type_keywords=_words("class interface type enum"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        long_strings=(("`", "`"),),
        capitalized_types=True,
    ),
    "c": _Grammar(
        keywords=_words(_C_KEYWORDS),
        types=_words(_C_TYPES),
        type_keywords=_words("struct union enum"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        extra=(_PREPROCESSOR,),
    ),
    "cpp": _Grammar(
        keywords=_words(_C_KEYWORDS + """
            alignas alignof and bitand bitor catch class compl concept constexpr
            consteval constinit const_cast co_await co_return co_yield decltype
            delete dynamic_cast explicit export friend mutable namespace new
            noexcept not operator private protected public reinterpret_cast
            requires static_assert static_cast template this throw try typeid
            typename using virtual nullptr override final
        """),
        types=_words(_C_TYPES + " wchar_t"),
        type_keywords=_words("class struct union enum"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        extra=(_PREPROCESSOR,),
    ),
    "csharp": _Grammar(
        keywords=_words("""
            abstract as base break case catch checked class const continue default
            delegate do else enum event explicit extern false finally fixed for
            foreach goto if implicit in interface internal is lock namespace new
            null operator out override params private protected public readonly
            ref return sealed sizeof stackalloc static struct switch this throw
            true try typeof unchecked unsafe using virtual void volatile while var
            async await get set record
        """),
        types=_words("""
            bool byte char decimal double float int long object sbyte short string
            uint ulong ushort
        """),
        type_keywords=_words("class struct interface enum record"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        extra=((r'@"(?:[^"]|"")*"?', "string"),),
        capitalized_types=True,
    ),
    "go": _Grammar(
        keywords=_words("""
            break case chan const continue default defer else fallthrough for func
            go goto if import interface map package range return select struct
            switch type var true false nil iota
        """),
        types=_words("""
            bool byte complex64 complex128 error float32 float64 int int8 int16
            int32 int64 rune string uint uint8 uint16 uint32 uint64 uintptr any
        """),
        function_keywords=_words("func"),
        type_keywords=_words("type"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        long_strings=(("`", "`"),),
    ),
    "java": _Grammar(
        keywords=_words("""
            abstract assert break case catch class const continue default do else
            enum extends final finally for goto if implements import instanceof
            interface native new package private protected public return static
            strictfp super switch synchronized this throw throws transient try
            volatile while var record yield true false null
        """),
        types=_words("boolean byte char double float int long short void"),
        type_keywords=_words("class interface enum record"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        extra=((r"@[^\W\d]\w*", "attribute"),),
        capitalized_types=True,
    ),
    "ruby": _Grammar(
        keywords=_words("""
            BEGIN END alias and begin break case class def defined do else elsif
            end ensure false for if in module next nil not or redo rescue retry
            return self super then true undef unless until when while yield
        """),
        function_keywords=_words("def"),
        type_keywords=_words("class module"),
        line_comments=("#",),
        block_comments=(("=begin", "=end"),),
        capitalized_types=True,
    ),
    "php": _Grammar(
        keywords=_words("""
            abstract and array as break callable case catch class clone const
            continue declare default do echo else elseif empty enddeclare endfor
            endforeach endif endswitch endwhile enum eval exit extends final
            finally fn for foreach function global goto if implements include
            include_once instanceof insteadof interface isset list match namespace
            new or print private protected public readonly require require_once
            return static switch throw trait try unset use var while xor yield
            true false null
        """),
        function_keywords=_words("function fn"),
        type_keywords=_words("class interface trait enum"),
        line_comments=("//", "#"),
        block_comments=_C_STYLE,
        extra=((r"<\?php|\?>", "keyword"), (r"\$[^\W\d]\w*", "variable")),
        capitalized_types=True,
    ),
    "bash": _Grammar(
        keywords=_words("""
            if then else elif fi case esac for select while until do done in
            function time coproc return exit export local readonly declare unset
            break continue
        """),
        function_keywords=_words("function"),
        line_comments=("#",),
        extra=((r"\$\{[^}\n]*\}?|\$[\w@#?$!*-]+", "variable"),),
    ),
    "css": _Grammar(
        keywords=_words("and not only from to inherit initial unset"),
        block_comments=_C_STYLE,
        extra=(
            (r"@[\w-]+", "keyword"),
            (r"!important", "keyword"),
            (r"#[0-9a-fA-F]{3,8}\b", "number"),
        ),
        identifier=r"-?[^\W\d][\w-]*",
    ),
    "html": _Grammar(
        block_comments=(("<!--", "-->"),),
        quotes='"',
        extra=_HTML_RULES,
        calls_are_functions=False,
    ),
    "toml": _Grammar(
        keywords=_words("true false"),
        line_comments=("#",),
        long_strings=(('"""', '"""'), ("'''", "'''")),
        extra=((r"(?m:^[ \t]*\[\[?[^\]\n]*\]\]?)", "type"),),
        calls_are_functions=False,
    ),
    "yaml": _Grammar(
        keywords=_words("true false null"),
        line_comments=("#",),
        extra=(
            (r"(?m:^(?:---|\.\.\.))", "punctuation"),
            (r"[^\W\d][\w-]*(?=[ \t]*:(?:\s|$))", "property"),
        ),
        calls_are_functions=False,
    ),
    "markdown": _Grammar(
        quotes="`",
        long_strings=(("```", "```"),),
        extra=(
            (r"(?m:^#{1,6}[ \t].*)", "keyword"),
            (r"\[[^\]\n]*\]\([^)\n]*\)", "string"),
        ),
        calls_are_functions=False,
    ),
    "lua": _Grammar(
        keywords=_words("""
            and break do else elseif end false for function goto if in local nil
            not or repeat return then true until while
        """),
        function_keywords=_words("function"),
        block_comments=(("--[[", "]]"),),
        line_comments=("--",),
        long_strings=(("[[", "]]"),),
    ),
    "swift": _Grammar(
        keywords=_words("""
            associatedtype class deinit enum extension fileprivate func import init
            inout internal let open operator private protocol public rethrows
            static struct subscript typealias var break case continue default
            defer do else fallthrough for guard if in repeat return switch where
            while as catch false is nil super self Self throw throws true try
            async await some any
        """),
        function_keywords=_words("func"),
        type_keywords=_words("class struct enum protocol extension"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        quotes='"',
        long_strings=(('"""', '"""'),),
        capitalized_types=True,
    ),
    "scala": _Grammar(
        keywords=_words("""
            abstract case catch class def do else extends false final finally for
            forSome if implicit import lazy match new null object override package
            private protected return sealed super this throw trait try true type
            val var while with yield given using then enum export end
        """),
        function_keywords=_words("def"),
        type_keywords=_words("class object trait"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        quotes='"',
        long_strings=(('"""', '"""'),),
        extra=(_CHAR_LITERAL,),
        capitalized_types=True,
    ),
    "zig": _Grammar(
        keywords=_words("""
            addrspace align allowzero and anyframe anytype asm async await break
            callconv catch comptime const continue defer else enum errdefer error
            export extern fn for if inline noalias nosuspend noinline opaque or
            orelse packed pub resume return linksection struct suspend switch test
            threadlocal try union unreachable usingnamespace var volatile while
            true false null undefined
        """),
        types=_words("""
            i8 i16 i32 i64 i128 isize u8 u16 u32 u64 u128 usize f16 f32 f64 f128
            bool void type anyerror comptime_int comptime_float noreturn
        """),
        function_keywords=_words("fn"),
        line_comments=("//",),
        quotes='"',
        extra=(_CHAR_LITERAL, (r"@[^\W\d]\w*", "function")),
        capitalized_types=True,
    ),
    "elixir": _Grammar(
        keywords=_words("""
            after and catch do else end false fn in nil not or rescue true when
            def defp defmodule defmacro defmacrop defstruct defprotocol defimpl
            import require alias use quote unquote receive case cond if unless
            with for try raise
        """),
        function_keywords=_words("def defp defmacro defmacrop"),
        type_keywords=_words("defmodule defprotocol"),
        line_comments=("#",),
        long_strings=(('"""', '"""'),),
        extra=((r":[^\W\d]\w*[?!]?", "constant"), (r"@[^\W\d]\w*", "attribute")),
        capitalized_types=True,
    ),
    "haskell": _Grammar(
        keywords=_words("""
            case class data default deriving do else foreign if import in infix
            infixl infixr instance let module newtype of then type where qualified
            as hiding forall
        """),
        type_keywords=_words("data newtype type class"),
        block_comments=(("{-", "-}"),),
        line_comments=("--",),
        quotes='"',
        extra=(_CHAR_LITERAL,),
        identifier=r"[^\W\d][\w']*",
        capitalized_types=True,
        calls_are_functions=False,
    ),
    "r": _Grammar(
        keywords=_words("""
            if else repeat while function for in next break TRUE FALSE NULL Inf
            NaN NA NA_integer_ NA_real_ NA_character_ return
        """),
        function_keywords=_words("function"),
        line_comments=("#",),
        identifier=r"[^\W\d][\w.]*",
    ),
    "dart": _Grammar(
        keywords=_words("""
            abstract as assert async await base break case catch class const
            continue covariant default deferred do dynamic else enum export
            extends extension external factory false final finally for get hide
            if implements import in interface is late library mixin new null on
            operator part required rethrow return sealed set show static super
            switch sync this throw true try typedef var void when while with yield
        """),
        types=_words("int double num bool"),
        type_keywords=_words("class mixin enum extension"),
        line_comments=("//",),
        block_comments=_C_STYLE,
        long_strings=(('"""', '"""'), ("'''", "'''")),
        capitalized_types=True,
    ),
    "ocaml": _Grammar(
        keywords=_words("""
            and as assert begin class constraint do done downto else end exception
            external false for fun function functor if in include inherit
            initializer lazy let match method module mutable new nonrec object of
            open private rec sig struct then to true try type val virtual when
            while with
        """),
        type_keywords=_words("type module"),
        block_comments=(("(*", "*)"),),
        quotes='"',
        extra=(_CHAR_LITERAL,),
        identifier=r"[^\W\d][\w']*",
        capitalized_types=True,
        calls_are_functions=False,
    ),
    "svelte": _Grammar(
        keywords=_words(_JS_KEYWORDS + " each then as key html debug"),
        function_keywords=_words("function"),
        line_comments=("//",),
        block_comments=(("<!--", "-->"), ("/*", "*/")),
        quotes="\"'",
        long_strings=(("`", "`"),),
        extra=((r"\{[#:/@]\w+", "keyword"),) + _HTML_RULES,
    ),
    "handlebars": _Grammar(
        keywords=_words("if else each with unless as this log lookup"),
        block_comments=(("{{!--", "--}}"), ("{{!", "}}")),
        extra=((r"\{\{[#/^>]?|\}\}", "punctuation"),),
        calls_are_functions=False,
    ),
}


def _byte_offsets(source: str) -> list[int] | None:
    """Map char offsets to byte offsets, or None when they coincide."""
    if source.isascii():
        return None
    return list(accumulate((len(ch.encode("utf-8")) for ch in source), initial=0))


class SyntaxState:
    """Highlighting state for one buffer.

    ``tree`` holds the token stream of the last parse for grammar-backed
    languages and stays None for languages with only simple rules.
    ``highlights`` holds ``(start_byte, end_byte, capture_name)`` spans.
    """

    def __init__(self, lang_name: str, extension: str) -> None:
        self.language_name = lang_name
        self.dirty = False
        self.highlights: list[Span] = []
        self.tree: tuple[Span, ...] | None = None
        self._grammar: _Grammar | None = None
        self._rules: SimpleRules | None = None

        if language_for_extension(extension) == lang_name and lang_name in _GRAMMARS:
            self._grammar = _GRAMMARS[lang_name]
            return
        rules = simple_rules_for_language(lang_name)
        if rules is None:
            raise UnsupportedLanguageError(
                f"no highlighting available for {lang_name!r} (.{extension})"
            )
        self._rules = rules

    def parse(self, source: str) -> None:
        """Re-scan ``source`` fully and refresh the cached highlights."""
        if self._grammar is not None:
            offsets = _byte_offsets(source)
            tokens = self._grammar.tokens(source)
            if offsets is not None:
                tokens = [(offsets[s], offsets[e], kind) for s, e, kind in tokens]
            self.tree = tuple(tokens)
            self.highlights = [t for t in tokens if t[2] != "identifier"]
        else:
            assert self._rules is not None
            self.highlights = compute_simple_highlights(self._rules, source)
        self.dirty = False

    def mark_dirty(self) -> None:
        """Flag the state as out of date with its buffer."""
        self.dirty = True

    def ensure_parsed(self, source: str) -> None:
        """Re-parse ``source`` only if the state is dirty."""
        if self.dirty:
            self.parse(source)