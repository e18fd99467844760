"""Static catalog data: signature patterns, families and display metadata.

Patterns are compiled with ``re.MULTILINE``; a ``(pattern, flags)`` pair adds
extra flags given as letters (``"i"`` for case-insensitive). Registration order
of ``DEFAULT_PATTERNS`` is significant: the classifier breaks ties by it.
"""

from __future__ import annotations

from typing import Dict, Sequence, Tuple, Union

RawPattern = Union[str, Tuple[str, str]]

DEFAULT_PATTERNS: Dict[str, Sequence[RawPattern]] = {
    "javascript": (
        r"\bfunction\s+\w+\s*\(",
        r"\b(?:const|let|var)\s+\w+\s*=(?!=)",
        r"=>\s*\{",
        r"\bconsole\.(?:log|error|warn|info)\s*\(",
        r"\brequire\s*\(\s*['\"]",
        r"\bmodule\.exports\b",
        r"\.prototype\.\w+",
        r"\btypeof\s+\w+",
        r"\w\s*(?:===|!==)\s*\S",
        r"\b(?:document|window)\.\w+",
    ),
    "typescript": (
        r"^[ \t]*(?:export\s+)?interface\s+\w+[^{\n]*\{",
        r"^[ \t]*(?:export\s+)?type\s+\w+(?:<[^>]*>)?\s*=",
        r":\s*(?:string|number|boolean|any|void|unknown|never)\b",
        r":\s*\w+\[\]",
        r"^[ \t]*import\s+type\s+",
        r"\bas\s+(?:const|string|number|any|unknown)\b",
        r"\b(?:readonly|private|public)\s+\w+\s*:\s*\w+",
    ),
    "python": (
        r"^[ \t]*def\s+\w+\s*\([^)]*\)\s*(?:->[^:]+)?:",
        r"^[ \t]*class\s+\w+(?:\([^)]*\))?\s*:",
        r"^[ \t]*from\s+[\w.]+\s+import\s+",
        r"if\s+__name__\s*==\s*['\"]__main__['\"]",
        r"\bprint\s*\(",
        r"^[ \t]*elif\s+.+:\s*$",
        r"^[ \t]*(?:try|else|finally)\s*:\s*$",
        r"^[ \t]*except(?:\s+[\w.]+(?:\s+as\s+\w+)?)?\s*:",
        r"\bself\.\w+",
        r"\blambda\s+\w*\s*:",
        r"\b(?:None|True|False)\b",
    ),
    "java": (
        r"\bpublic\s+(?:final\s+|abstract\s+)?class\s+\w+",
        r"\bpublic\s+static\s+void\s+main\s*\(\s*String",
        r"\bSystem\.out\.print(?:ln|f)?\s*\(",
        r"^[ \t]*import\s+javax?\.[\w.]+(?:\.\*)?;",
        r"^[ \t]*package\s+[\w.]+;",
        r"@Override\b",
        r"\b(?:public|private|protected)\s+(?:static\s+)?(?:final\s+)?\w+(?:<[^>]*>)?\s+\w+\s*\(",
        r"\bthrows\s+\w+",
        r"\bString\[\]\s+\w+",
        r"\b(?:extends|implements)\s+\w+",
    ),
    "csharp": (
        r"^[ \t]*using\s+System(?:\.\w+)*;",
        r"\bConsole\.Write(?:Line)?\s*\(",
        r"\bstatic\s+void\s+Main\s*\(",
        r"\{\s*get;\s*(?:private\s+)?set;\s*\}",
        r"^[ \t]*namespace\s+[\w.]+\s*(?:\{|;|$)",
        r"\bforeach\s*\(\s*\w+\s+\w+\s+in\b",
        r"\basync\s+Task\b",
        r"\[(?:HttpGet|HttpPost|Serializable|Test|Fact|Route)[^\]]*\]",
    ),
    "cpp": (
        r"^[ \t]*#include\s*<\w+>",
        r"\busing\s+namespace\s+std\s*;",
        r"\bstd::\w+",
        r"\bcout\s*<<|\bcin\s*>>",
        r"\btemplate\s*<",
        r"\bnullptr\b",
        r"\b(?:vector|map|unique_ptr|shared_ptr)<",
        r"^[ \t]*(?:public|private|protected)\s*:",
        r"\bauto\s+\w+\s*=",
    ),
    "c": (
        r"^[ \t]*#include\s*<\w+\.h>",
        r"\bprintf\s*\(",
        r"\bscanf\s*\(",
        r"\b(?:malloc|calloc|realloc)\s*\(",
        r"\bfree\s*\(\s*\w+\s*\)",
        r"^[ \t]*typedef\s+(?:struct|enum|union|\w+)",
        r"\bstruct\s+\w+\s*\*",
        r"\bFILE\s*\*",
        r"\bint\s+main\s*\(",
        r"\bchar\s*\*\s*\w+|\bchar\s+\w+\[",
    ),
    "rust": (
        r"\bfn\s+\w+\s*(?:<[^>]*>)?\s*\(",
        r"\blet\s+mut\s+\w+",
        r"^[ \t]*use\s+(?:std|crate|super)::",
        r"^[ \t]*impl(?:<[^>]*>)?\s+\w+",
        r"\b(?:println|print|format|vec|panic)!\s*[(\[]",
        r"\b(?:Vec|Option|Result|Box)<",
        r"\bmatch\s+\w+\s*\{",
        r"&(?:mut\s+)?self\b",
        r"->\s*(?:Self|Result|Option|i32|u32|i64|u64|f64|usize)\b",
        r"^[ \t]*#\[derive\(",
    ),
    "go": (
        r"^[ \t]*package\s+\w+\s*$",
        r"^[ \t]*import\s+\(",
        r"^[ \t]*import\s+\"[\w/.]+\"",
        r"\bfunc\s+(?:\(\s*\w+\s+\*?\w+\s*\)\s*)?\w+\s*\([^)]*\)\s*(?:(?:[\w*\[\]]+|\([^)]*\))\s*)?\{",
        r"\bfmt\.\w+\s*\(",
        r"\b\w+\s*:=",
        r"\bgo\s+(?:func\b|\w+\()",
        r"\bchan\s+\w+|<-\s*\w+",
        r"\bdefer\s+\w+",
        r"\bmake\s*\(\s*(?:\[\]|map|chan)",
        r"\berr\s*!=\s*nil\b",
    ),
    "php": (
        r"<\?php",
        r"\$\w+\s*=[^=]",
        r"\becho\s+['\"$]",
        r"->\w+\s*\(",
        r"\bfunction\s+\w+\s*\([^)]*\$\w+",
        r"\bforeach\s*\(\s*\$\w+\s+as\b",
        r"\b(?:isset|empty|array_\w+)\s*\(",
        r"^[ \t]*namespace\s+[\w\\]+;",
        r"^[ \t]*use\s+[\w\\]+\\\w+;",
    ),
    "ruby": (
        r"^[ \t]*def\s+\w+[?!]?(?:\s*\([^)]*\))?\s*$",
        r"^[ \t]*end\s*$",
        r"^[ \t]*(?:module|class)\s+[A-Z]\w*(?:\s*<\s*[A-Z][\w:]*)?\s*$",
        r"\bputs\s+",
        r"^[ \t]*require(?:_relative)?\s+['\"]",
        r"\battr_(?:accessor|reader|writer)\s+:",
        r"\bdo\s*\|\w+(?:,\s*\w+)*\|",
        r"^[ \t]*(?:unless|elsif)\s+",
        r"@\w+\s*=",
        r":\w+\s*=>",
    ),
    "swift": (
        r"\bfunc\s+\w+\s*\([^)]*\)\s*->",
        r"^[ \t]*import\s+(?:UIKit|Foundation|SwiftUI|Combine)\b",
        r"\bguard\s+let\b",
        r"\bif\s+let\s+\w+\s*=",
        r"\boverride\s+func\b",
        r"^[ \t]*extension\s+\w+",
        r"^[ \t]*protocol\s+\w+",
        r"\bstruct\s+\w+\s*:\s*\w+",
        r"@(?:State|Published|IBOutlet|IBAction|objc)\b",
        r"\\\(\w+",
    ),
    "kotlin": (
        r"\bfun\s+(?:<[^>]*>\s*)?\w+\s*\(",
        r"\bval\s+\w+\s*(?::\s*\w+\s*)?=",
        r"\bdata\s+class\s+\w+",
        r"\bprintln\s*\(",
        r"\bwhen\s*\([^)]*\)\s*\{",
        r"\bcompanion\s+object\b",
        r"\bsealed\s+class\b",
        r"^[ \t]*object\s+\w+\s*[:{]",
        r"\w\s*\?:\s*\S",
    ),
    "json": (
        r"^[ \t]*[\[{][ \t]*$",
        r"\"[^\"\n]+\"\s*:\s*",
        r":\s*\"[^\"\n]*\"[ \t]*,?[ \t]*$",
        r":\s*-?\d+(?:\.\d+)?[ \t]*,?[ \t]*$",
        r":\s*(?:true|false|null)[ \t]*,?[ \t]*$",
        r"^[ \t]*[\]}][ \t]*,?[ \t]*$",
    ),
    "yaml": (
        r"^[ \t]*[A-Za-z_][\w.-]*:[ \t]+[^\s;{}\[\]()][^;{}()\n]*$",
        r"^[ \t]*(?!(?:else|try|finally|except|default|public|private|protected)\b)[A-Za-z_][\w.-]*:[ \t]*$",
        r"^[ \t]*-[ \t]+\S",
        r"^---\s*$",
        r"^[ \t]*-[ \t]+[\w.-]+:[ \t]",
    ),
    "xml": (
        r"<\?xml\b",
        r"</[\w:.-]+>",
        r"<[\w:.-]+(?:\s+[\w:.-]+=\"[^\"]*\")*\s*/>",
        r"\bxmlns(?::\w+)?=",
        r"<!\[CDATA\[",
        r"<[a-z]+:[\w.-]+[\s>]",
    ),
    "css": (
        r"^[ \t]*[.#][\w-][^{;\n]*\{",
        r"^[ \t]*(?:body|html|a|p|div|span|h[1-6]|ul|ol|li|img|button|input|nav|header|footer|section|main|table)(?:[\s,:.#>][^{;\n]*)?\{",
        r"^[ \t]*(?:color|background(?:-color)?|margin(?:-\w+)?|padding(?:-\w+)?|font(?:-\w+)?|border(?:-\w+)?|display|width|height|position|top|left|right|bottom|flex(?:-\w+)?|grid(?:-\w+)?|text-\w+|line-height|opacity|z-index|transition|transform|box-shadow|cursor|overflow)\s*:[^;{}\n]+;",
        r"@media\s[^{]+\{",
        r"@import\s+(?:url\(|['\"])",
        r"@keyframes\s+[\w-]+",
        r":(?:hover|active|focus|visited|first-child|last-child|nth-child\([^)]*\))",
        r"!important\b",
        r"\b(?:rgba?|hsla?)\s*\(",
        r"#[0-9a-fA-F]{3}(?:[0-9a-fA-F]{3})?\b",
        r"\b\d+(?:px|rem|em|vh|vw)\b",
    ),
    "scss": (
        r"^[ \t]*\$[\w-]+\s*:[^;\n]+;",
        r"@mixin\s+[\w-]+",
        r"@include\s+[\w-]+",
        r"@extend\s+[.%#]?[\w-]+",
        r"&(?::|::|\.|-)[\w-]+",
        r"#\{[^}]+\}",
        r"@(?:if|else|for|each|while|function|return)\b",
        r":\s*\$[\w-]+",
        r"^[ \t]+[.#&][^{;\n]*\{",
    ),
    "html": (
        (r"<!DOCTYPE\s+html", "i"),
        r"<html\b",
        r"<(?:head|body)\b",
        r"<(?:div|span|p|ul|ol|li|h[1-6]|table|form|button|section|nav|header|footer)\b[^>]*>",
        r"<a\s+href=",
        r"<img\s[^>]*src=",
        r"<(?:script|style|link|meta)\b",
        r"\bclass=\"",
    ),
    "jsx": (
        r"^[ \t]*import\s+React\b",
        r"from\s+['\"]react(?:-dom)?['\"]",
        r"\bclassName=",
        r"\bon[A-Z]\w+=\{",
        r"\buse(?:State|Effect|Memo|Callback|Ref|Context|Reducer)\s*\(",
        r"\breturn\s*\(\s*<",
        r"\bprops\.\w+",
        r"=\{\s*[\w.]+\s*\}",
        r"(?<![\w.])<[A-Z]\w*(?:\s+[\w-]+=|\s*/>)",
    ),
    "sql": (
        (r"\bSELECT\s[^;]{0,500}?\bFROM\s+\w+", "i"),
        (r"\bINSERT\s+INTO\s+\w+", "i"),
        (r"\bUPDATE\s+\w+\s+SET\b", "i"),
        (r"\bDELETE\s+FROM\s+\w+", "i"),
        (r"\bCREATE\s+(?:TABLE|INDEX|VIEW|DATABASE)\b", "i"),
        (r"\b(?:ALTER|DROP)\s+TABLE\b", "i"),
        (r"\b(?:INNER\s+|LEFT\s+|RIGHT\s+|FULL\s+)?JOIN\s+\w+(?:\s+\w+)?\s+ON\b", "i"),
        (r"\bWHERE\s+\w+(?:\.\w+)?\s*(?:=|<>|!=|<|>|LIKE\b|IN\b|IS\b)", "i"),
        (r"\b(?:GROUP|ORDER)\s+BY\b", "i"),
        (r"\b(?:PRIMARY\s+KEY|FOREIGN\s+KEY|NOT\s+NULL|VARCHAR\s*\()", "i"),
    ),
    "bash": (
        r"^#!\s*/(?:usr/)?bin/(?:env\s+)?(?:ba|z|k)?sh\b",
        r"^[ \t]*if\s+\[\[?\s",
        r";\s*(?:then|do)\s*$",
        r"^[ \t]*(?:fi|done|esac)\s*$",
        r"\"\$\{?\w+\}?\"",
        r"^[ \t]*export\s+[A-Z_][A-Z0-9_]*=",
        r"^[ \t]*echo\s+",
        r"\b(?:chmod|chown|grep|sed|awk|curl|mkdir|apt-get)\s+-?\w",
        r"^[ \t]*\w+\s*\(\)\s*\{",
        r"^[ \t]*function\s+\w+\s*\{",
        r"\|\s*(?:grep|sed|awk|xargs|sort|uniq|wc|tee|head|tail)\b",
    ),
    "dockerfile": (
        r"^FROM\s+(?:--platform=\S+\s+)?[\w.-]+[:/@][\w./:@-]+(?:\s+AS\s+\w+)?\s*$",
        r"^RUN\s+",
        r"^(?:COPY|ADD)\s+(?:--\w+=\S+\s+)*\S+\s+\S+",
        r"^WORKDIR\s+/",
        r"^EXPOSE\s+\d+",
        r"^(?:CMD|ENTRYPOINT)\s+\[",
        r"^ENV\s+\w+[=\s]",
        r"^(?:LABEL|ARG|USER|VOLUME|HEALTHCHECK)\s+",
    ),
}

PROGRAMMING_LANGUAGES: Tuple[str, ...] = (
    "javascript",
    "typescript",
    "python",
    "java",
    "csharp",
    "cpp",
    "c",
    "rust",
    "go",
    "php",
    "ruby",
    "swift",
    "kotlin",
)

DATA_FORMATS: Tuple[str, ...] = ("json", "yaml", "xml")

STYLE_LANGUAGES: Tuple[str, ...] = ("css", "scss")

MARKUP_LANGUAGES: Tuple[str, ...] = ("html", "jsx")

INFRA_LANGUAGES: Tuple[str, ...] = ("sql", "bash", "dockerfile")

FAMILIES: Dict[str, Tuple[str, ...]] = {
    "programming": PROGRAMMING_LANGUAGES,
    "data": DATA_FORMATS,
    "style": STYLE_LANGUAGES,
    "markup": MARKUP_LANGUAGES,
    "infra": INFRA_LANGUAGES,
}

PRIORITY_TARGETS: Dict[str, Tuple[str, ...]] = {
    "javascript": ("typescript", "python", "java"),
    "typescript": ("javascript", "python", "java"),
    "python": ("javascript", "java", "go"),
    "java": ("kotlin", "scala", "csharp"),
    "csharp": ("java", "typescript", "go"),
    "cpp": ("rust", "go", "c"),
    "rust": ("go", "cpp", "c"),
    "go": ("rust", "java", "python"),
    "php": ("javascript", "python", "ruby"),
    "ruby": ("python", "javascript", "go"),
    "swift": ("kotlin", "java", "csharp"),
    "kotlin": ("java", "swift", "scala"),
}

DISPLAY_NAMES: Dict[str, str] = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "python": "Python",
    "java": "Java",
    "csharp": "C#",
    "cpp": "C++",
    "c": "C",
    "rust": "Rust",
    "go": "Go",
    "php": "PHP",
    "ruby": "Ruby",
    "swift": "Swift",
    "kotlin": "Kotlin",
    "scala": "Scala",
    "dart": "Dart",
    "json": "JSON",
    "yaml": "YAML",
    "xml": "XML",
    "toml": "TOML",
    "ini": "INI",
    "css": "CSS",
    "scss": "SCSS",
    "less": "Less",
    "html": "HTML",
    "jsx": "JSX",
    "vue": "Vue",
    "svelte": "Svelte",
    "sql": "SQL",
    "bash": "Bash",
    "powershell": "PowerShell",
    "dockerfile": "Dockerfile",
    "makefile": "Makefile",
    "terraform": "Terraform",
    "kubernetes": "Kubernetes",
    "markdown": "Markdown",
    "r": "R",
    "lua": "Lua",
    "perl": "Perl",
    "haskell": "Haskell",
    "elixir": "Elixir",
    "clojure": "Clojure",
    "erlang": "Erlang",
    "fsharp": "F#",
    "ocaml": "OCaml",
}

ICONS: Dict[str, str] = {
    "javascript": "🟨",
    "typescript": "🔷",
    "python": "🐍",
    "java": "☕",
    "csharp": "💙",
    "cpp": "⚡",
    "c": "🔧",
    "rust": "🦀",
    "go": "🐹",
    "php": "🐘",
    "ruby": "💎",
    "swift": "🍎",
    "kotlin": "🎯",
    "scala": "🔴",
    "json": "📋",
    "yaml": "📄",
    "xml": "📰",
    "css": "🎨",
    "scss": "💅",
    "html": "🌐",
    "jsx": "⚛️",
    "sql": "🗃️",
    "bash": "🐚",
    "dockerfile": "🐳",
    "haskell": "🎓",
}

DEFAULT_ICON = "📄"

# Line-comment syntax used by the generic fallback banner: (prefix, suffix).
COMMENT_STYLES: Dict[str, Tuple[str, str]] = {
    "python": ("# ", ""),
    "ruby": ("# ", ""),
    "bash": ("# ", ""),
    "dockerfile": ("# ", ""),
    "yaml": ("# ", ""),
    "perl": ("# ", ""),
    "r": ("# ", ""),
    "elixir": ("# ", ""),
    "makefile": ("# ", ""),
    "terraform": ("# ", ""),
    "powershell": ("# ", ""),
    "toml": ("# ", ""),
    "sql": ("-- ", ""),
    "haskell": ("-- ", ""),
    "lua": ("-- ", ""),
    "html": ("<!-- ", " -->"),
    "xml": ("<!-- ", " -->"),
    "markdown": ("<!-- ", " -->"),
    "css": ("/* ", " */"),
    "scss": ("// ", ""),
    "ini": ("; ", ""),
    "clojure": (";; ", ""),
    "erlang": ("% ", ""),
}

DEFAULT_COMMENT_STYLE: Tuple[str, str] = ("// ", "")

MAX_SUGGESTIONS = 6
