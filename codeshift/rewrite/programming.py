"""Substitution pipelines between general-purpose programming languages."""

from __future__ import annotations

import re
from functools import partial
from typing import Dict, List, Optional, Tuple

from .base import SubstitutionRule, sub
from .indentation import DEFAULT_INDENT_UNIT, braces_to_indent, indent_to_braces

_JAVA_TO_KOTLIN_TYPES: Dict[str, str] = {
    "int": "Int",
    "long": "Long",
    "short": "Short",
    "byte": "Byte",
    "double": "Double",
    "float": "Float",
    "boolean": "Boolean",
    "char": "Char",
    "String": "String",
    "Object": "Any",
}

_JAVA_LOCAL_TYPES = r"(?:int|long|short|byte|double|float|boolean|char|String|[A-Z]\w*(?:<[^>]*>)?)"


def _split_params(params: str) -> List[str]:
    return [param.strip() for param in params.split(",") if param.strip()]


# ---------------------------------------------------------------------------
# JavaScript <-> TypeScript
# ---------------------------------------------------------------------------


def _type_param(param: str) -> str:
    if ":" in param:
        return param
    if "=" in param:
        name, default = param.split("=", 1)
        return f"{name.strip()}: any = {default.strip()}"
    return f"{param}: any"


def _typed_params(params: str) -> str:
    return ", ".join(_type_param(param) for param in _split_params(params))


def _typed_function(match: re.Match) -> str:
    return f"{match.group(1)}function {match.group(2)}({_typed_params(match.group(3))}): any"


def _typed_arrow(match: re.Match) -> str:
    keyword, name, is_async, params = match.group(1, 2, 3, 4)
    return f"{keyword} {name} = {is_async or ''}({_typed_params(params)}): any =>"


def _typed_variable(match: re.Match) -> str:
    keyword, name, value = match.group(1, 2, 3)
    if "=>" in value:
        return match.group(0)
    return f"{keyword} {name}: any = {value};"


def javascript_to_typescript() -> SubstitutionRule:
    return SubstitutionRule(
        "javascript",
        "typescript",
        [
            sub(r"((?:async\s+)?)function\s+(\w+)\s*\(([^)]*)\)(?!\s*:)", _typed_function),
            sub(r"\b(const|let|var)\s+(\w+)\s*=\s*(async\s+)?\(([^)]*)\)\s*=>", _typed_arrow),
            sub(r"\b(const|let|var)\s+(\w+)\s*=\s*([^;\n]+);", _typed_variable),
        ],
    )


def typescript_to_javascript() -> SubstitutionRule:
    type_name = r"[A-Za-z_$][\w.$]*(?:<[^<>]*>)?(?:\[\])*"
    return SubstitutionRule(
        "typescript",
        "javascript",
        [
            sub(r"^[ \t]*import\s+type\s+[^;]+;[ \t]*\n?", ""),
            sub(
                r"^[ \t]*(?:export\s+)?interface\s+\w+(?:<[^>]*>)?(?:\s+extends\s+[^{]+)?\s*\{[^}]*\}[ \t]*\n?",
                "",
            ),
            sub(r"^[ \t]*(?:export\s+)?type\s+\w+(?:<[^>]*>)?\s*=\s*[^;]+;[ \t]*\n?", ""),
            sub(r"^[ \t]*(?:export\s+)?(?:const\s+)?enum\s+\w+\s*\{[^}]*\}[ \t]*\n?", ""),
            sub(r"\s+implements\s+[\w$.,\s<>]+?(?=\s*\{)", ""),
            sub(r"\b(?:public|private|protected|readonly)\s+(?=[\w$])", ""),
            sub(rf"\)\s*:\s*{type_name}(?:\s*\|\s*{type_name})*(?=\s*(?:\{{|=>))", ")"),
            sub(rf"([\w$])\??\s*:\s*{type_name}(?:\s*\|\s*{type_name})*(?=\s*[,)=;])", r"\1"),
            sub(rf"\s+as\s+{type_name}", ""),
            sub(r"(?<=[\w$])<[\w$\s,.|\[\]]+>(?=\s*[({=])", ""),
        ],
    )


# ---------------------------------------------------------------------------
# Python <-> JavaScript
# ---------------------------------------------------------------------------


def _js_params(params: str) -> str:
    cleaned: List[str] = []
    for param in _split_params(params):
        name, _, default = param.partition("=")
        name = name.split(":", 1)[0].strip()
        if name in {"self", "cls"}:
            continue
        cleaned.append(f"{name} = {default.strip()}" if default else name)
    return ", ".join(cleaned)


def _js_function(match: re.Match) -> str:
    return f"{match.group(1)}function {match.group(2)}({_js_params(match.group(3))}) {{"


def _js_class(match: re.Match) -> str:
    indent, name, bases = match.group(1, 2, 3)
    parents = [base for base in _split_params(bases or "") if base != "object"]
    extends = f" extends {parents[0]}" if parents else ""
    return f"{indent}class {name}{extends} {{"


def _js_catch(match: re.Match) -> str:
    return f"{match.group(1)}catch ({match.group(3) or 'error'}) {{"


_JS_FUNCTION_LINE = re.compile(r"^([ \t]*)function (\w+)(\(.*\) \{)$")
_JS_CLASS_LINE = re.compile(r"^([ \t]*)class \w+(?: extends [\w.]+)? \{$")


def _class_methods(text: str) -> str:
    """Rewrite functions declared directly in a class body as method shorthand."""
    lines = text.split("\n")
    # (class indent, body indent) for each open class.
    classes: List[Tuple[int, Optional[int]]] = []
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        indent = len(line) - len(line.lstrip())
        while classes and indent <= classes[-1][0]:
            classes.pop()
        if classes and classes[-1][1] is None:
            classes[-1] = (classes[-1][0], indent)
        match = _JS_FUNCTION_LINE.match(line)
        if match and classes and indent == classes[-1][1]:
            name = "constructor" if match.group(2) == "__init__" else match.group(2)
            lines[index] = f"{match.group(1)}{name}{match.group(3)}"
        elif _JS_CLASS_LINE.match(line):
            classes.append((indent, None))
    return "\n".join(lines)


def python_to_javascript(indent_unit: int = DEFAULT_INDENT_UNIT) -> SubstitutionRule:
    return SubstitutionRule(
        "python",
        "javascript",
        [
            sub(r"^([ \t]*)#[ \t]?", r"\1// "),
            sub(r"^([ \t]*)(?:async\s+)?def\s+(\w+)\s*\(([^)]*)\)\s*(?:->\s*[^:]+)?:[ \t]*$", _js_function),
            sub(r"^([ \t]*)class\s+(\w+)(?:\(([^)]*)\))?[ \t]*:[ \t]*$", _js_class),
            sub(r"^([ \t]*)elif\s+(.+?)[ \t]*:[ \t]*$", r"\1else if (\2) {"),
            sub(r"^([ \t]*)if\s+(.+?)[ \t]*:[ \t]*$", r"\1if (\2) {"),
            sub(r"^([ \t]*)else[ \t]*:[ \t]*$", r"\1else {"),
            sub(r"^([ \t]*)for\s+(\w+)\s+in\s+range\((\w+)\)[ \t]*:[ \t]*$", r"\1for (let \2 = 0; \2 < \3; \2++) {"),
            sub(r"^([ \t]*)for\s+(.+?)\s+in\s+(.+?)[ \t]*:[ \t]*$", r"\1for (let \2 of \3) {"),
            sub(r"^([ \t]*)while\s+(.+?)[ \t]*:[ \t]*$", r"\1while (\2) {"),
            sub(r"^([ \t]*)try[ \t]*:[ \t]*$", r"\1try {"),
            sub(r"^([ \t]*)except(?:\s+([\w.]+)(?:\s+as\s+(\w+))?)?[ \t]*:[ \t]*$", _js_catch),
            sub(r"^([ \t]*)finally[ \t]*:[ \t]*$", r"\1finally {"),
            sub(r"^([ \t]*)pass[ \t]*$", r"\1// pass"),
            sub(r"\bprint\s*\(", "console.log("),
            sub(r"\bself\.", "this."),
            sub(r"\bTrue\b", "true"),
            sub(r"\bFalse\b", "false"),
            sub(r"\bNone\b", "null"),
            sub(r"\bnot\s+", "!"),
            sub(r"\band\b", "&&"),
            sub(r"\bor\b", "||"),
        ],
        postprocess=[_class_methods, partial(indent_to_braces, unit=indent_unit)],
    )


def _py_catch(match: re.Match) -> str:
    name = match.group(1)
    return f"except Exception as {name}:" if name else "except Exception:"


def _py_method(match: re.Match) -> str:
    indent, name, params = match.group(1, 2, 3)
    return f"{indent}def {name}({', '.join(['self', *_split_params(params)])}):"


def javascript_to_python(indent_unit: int = DEFAULT_INDENT_UNIT) -> SubstitutionRule:
    return SubstitutionRule(
        "javascript",
        "python",
        [
            sub(r"^([ \t]*)//[ \t]?", r"\1# "),
            sub(r"(?:async\s+)?function\s+(\w+)\s*\(([^)]*)\)\s*\{", r"def \1(\2):"),
            sub(r"\b(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?\(([^)]*)\)\s*=>\s*\{", r"def \1(\2):"),
            sub(r"\bclass\s+(\w+)\s+extends\s+([\w.]+)\s*\{", r"class \1(\2):"),
            sub(r"\bclass\s+(\w+)\s*\{", r"class \1:"),
            sub(r"^([ \t]*)constructor\s*\(\s*\)\s*\{", r"\1def __init__(self):"),
            sub(r"^([ \t]*)constructor\s*\(([^)]*)\)\s*\{", r"\1def __init__(self, \2):"),
            sub(
                r"^([ \t]+)(?:async\s+)?(?!(?:if|for|while|switch|catch|function|with|return)\b)"
                r"(\w+)\s*\(([^()]*)\)\s*\{[ \t]*$",
                _py_method,
            ),
            sub(r"\bconsole\.log\s*\(", "print("),
            sub(r"\belse\s+if\s*\((.+)\)\s*\{", r"elif \1:"),
            sub(r"\bif\s*\((.+)\)\s*\{", r"if \1:"),
            sub(r"\belse\s*\{", "else:"),
            sub(
                r"\bfor\s*\(\s*(?:let|var)\s+(\w+)\s*=\s*0\s*;\s*\1\s*<\s*([^;]+?)\s*;\s*\1\+\+\s*\)\s*\{",
                r"for \1 in range(\2):",
            ),
            sub(r"\bfor\s*\(\s*(?:const|let|var)\s+(\w+)\s+of\s+(.+)\)\s*\{", r"for \1 in \2:"),
            sub(r"\bwhile\s*\((.+)\)\s*\{", r"while \1:"),
            sub(r"\btry\s*\{", "try:"),
            sub(r"\bcatch\s*\(\s*(\w*)\s*\)\s*\{", _py_catch),
            sub(r"\bfinally\s*\{", "finally:"),
            sub(r"\bthis\.", "self."),
            sub(r"===", "=="),
            sub(r"!==", "!="),
            sub(r"!(?!=)", "not "),
            sub(r"&&", "and"),
            sub(r"\|\|", "or"),
            sub(r"\btrue\b", "True"),
            sub(r"\bfalse\b", "False"),
            sub(r"\b(?:null|undefined)\b", "None"),
            sub(r"^([ \t]*)(?:const|let|var)\s+", r"\1"),
            sub(r";[ \t]*$", ""),
        ],
        postprocess=[partial(braces_to_indent, unit=indent_unit)],
    )


# ---------------------------------------------------------------------------
# Java -> Kotlin / C#
# ---------------------------------------------------------------------------


def _kotlin_type(java_type: str) -> str:
    if java_type.endswith("[]"):
        return f"Array<{_kotlin_type(java_type[:-2])}>"
    return _JAVA_TO_KOTLIN_TYPES.get(java_type, java_type)


def _kotlin_params(params: str) -> str:
    converted: List[str] = []
    for param in _split_params(params):
        parts = param.replace("final ", "").split()
        if len(parts) < 2:
            converted.append(param)
            continue
        converted.append(f"{parts[-1]}: {_kotlin_type(' '.join(parts[:-1]))}")
    return ", ".join(converted)


def _kotlin_method(match: re.Match) -> str:
    indent, visibility, return_type, name, params = match.group(1, 2, 3, 4, 5)
    prefix = "private " if visibility in {"private", "protected"} else ""
    suffix = "" if return_type == "void" else f": {_kotlin_type(return_type)}"
    return f"{indent}{prefix}fun {name}({_kotlin_params(params)}){suffix} {{"


def _kotlin_variable(match: re.Match) -> str:
    indent, keyword, java_type, name, value = match.group(1, 2, 3, 4, 5)
    declaration = "val" if keyword else "var"
    return f"{indent}{declaration} {name}: {_kotlin_type(java_type)} = {value}"


def java_to_kotlin() -> SubstitutionRule:
    return SubstitutionRule(
        "java",
        "kotlin",
        [
            sub(r"\bpublic\s+(?:final\s+)?class\s+(\w+)", r"class \1"),
            sub(
                r"^([ \t]*)(?:(public|private|protected)\s+)?(?:static\s+)?(?:final\s+)?"
                r"(?!(?:else|return|new|throw|public|private|protected|static|final)\b)([\w<>\[\]]+)\s+(\w+)\s*\(([^)]*)\)\s*\{",
                _kotlin_method,
            ),
            sub(
                rf"^([ \t]*)(final\s+)?({_JAVA_LOCAL_TYPES}(?:\[\])?)\s+(\w+)\s*=\s*(.+?);[ \t]*$",
                _kotlin_variable,
            ),
            sub(r"\bSystem\.out\.println\s*\(", "println("),
            sub(r"\bSystem\.out\.print\s*\(", "print("),
            sub(r"\bnew\s+(\w+)", r"\1"),
            sub(r";[ \t]*$", ""),
        ],
    )


def _ensure_using_system(text: str) -> str:
    if "Console." in text and not re.search(r"^\s*using\s+System\s*;", text, re.MULTILINE):
        return "using System;\n" + text
    return text


def java_to_csharp() -> SubstitutionRule:
    return SubstitutionRule(
        "java",
        "csharp",
        [
            sub(r"^([ \t]*)package\s+([\w.]+)\s*;", r"\1namespace \2;"),
            sub(r"^([ \t]*)import\s+(?:static\s+)?([\w.*]+)\s*;", r"\1using \2;"),
            sub(r"\bSystem\.out\.println\s*\(", "Console.WriteLine("),
            sub(r"\bSystem\.out\.print\s*\(", "Console.Write("),
            sub(r"\bString\b", "string"),
            sub(r"\bboolean\b", "bool"),
            sub(r"\bclass\s+(\w+)\s+extends\s+(\w+)", r"class \1 : \2"),
            sub(r"\bvoid\s+main\s*\(", "void Main("),
            sub(r"\.length\(\)", ".Length"),
        ],
        postprocess=[_ensure_using_system],
    )


__all__ = [
    "java_to_csharp",
    "java_to_kotlin",
    "javascript_to_python",
    "javascript_to_typescript",
    "python_to_javascript",
    "typescript_to_javascript",
]
