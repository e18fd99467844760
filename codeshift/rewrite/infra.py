"""Rewrites for infrastructure scripts: SQL DDL and Dockerfiles."""

from __future__ import annotations

import json
import re
import shlex
from typing import Any, Dict, List, Optional, Tuple

from ..formats import json_codec
from .base import Rule

_CREATE_TABLE = re.compile(
    r"CREATE\s+(?:TEMPORARY\s+)?TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?([`\"\[\]\w.]+)\s*\(",
    re.IGNORECASE,
)
_COLUMN = re.compile(r"^([`\"\[\]\w]+)\s+([A-Za-z]\w*(?:\s*\([^)]*\))?)(?:\s+(.*))?$", re.DOTALL)
_TABLE_CONSTRAINTS = {"PRIMARY", "FOREIGN", "UNIQUE", "CONSTRAINT", "KEY", "INDEX", "CHECK"}


def _strip_identifier(name: str) -> str:
    return name.strip().strip('`"[]')


def _split_top_level(body: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in body:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return [part for part in parts if part]


def _balanced_body(text: str, start: int) -> Optional[str]:
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return text[start:index]
    return None


def _column(definition: str) -> Dict[str, Any]:
    match = _COLUMN.match(" ".join(definition.split()))
    if match is None:
        return {"name": _strip_identifier(definition), "type": "VARCHAR", "constraints": None}
    name, column_type, rest = match.group(1, 2, 3)
    return {
        "name": _strip_identifier(name),
        "type": column_type.upper(),
        "constraints": (rest or "").strip() or None,
    }


class SqlToJsonSchemaRule(Rule):
    """Summarises ``CREATE TABLE`` statements as a JSON document."""

    source = "sql"
    target = "json"

    def apply(self, text: str) -> str:
        tables: Dict[str, Any] = {}
        for match in _CREATE_TABLE.finditer(text):
            body = _balanced_body(text, match.end())
            if body is None:
                continue
            columns: List[Dict[str, Any]] = []
            constraints: List[str] = []
            for definition in _split_top_level(body):
                first = definition.split(None, 1)[0].upper()
                if first in _TABLE_CONSTRAINTS:
                    constraints.append(" ".join(definition.split()))
                else:
                    columns.append(_column(definition))
            table: Dict[str, Any] = {"columns": columns, "type": "table"}
            if constraints:
                table["constraints"] = constraints
            tables[_strip_identifier(match.group(1))] = table
        return json_codec.encode({"database": {"tables": tables}})


def _exec_form(argument: str) -> str:
    """Turn ``["npm", "start"]`` into ``npm start``; shell form passes through."""
    stripped = argument.strip()
    if stripped.startswith("["):
        try:
            parts = json.loads(stripped)
        except ValueError:
            return stripped
        if isinstance(parts, list):
            return " ".join(shlex.quote(str(part)) for part in parts)
    return stripped


def _copy(argument: str) -> str:
    parts = [part for part in _exec_form(argument).split() if not part.startswith("--")]
    return "cp -r " + " ".join(parts)


def _env(argument: str) -> List[str]:
    if not argument:
        return []
    if "=" in argument.split(None, 1)[0]:
        exports = []
        for token in shlex.split(argument):
            key, _, value = token.partition("=")
            exports.append(f"export {key}={shlex.quote(value)}")
        return exports
    key, _, value = argument.partition(" ")
    return [f"export {key}={shlex.quote(value.strip())}"]


def _arg(argument: str) -> str:
    name, _, default = argument.partition("=")
    if default:
        return f'{name}="${{{name}:-{default}}}"'
    return f'{name}="${{{name}:-}}"'


class DockerfileToBashRule(Rule):
    """Translates Dockerfile instructions one by one into a shell script."""

    source = "dockerfile"
    target = "bash"

    HEADER = ("#!/bin/bash", "set -euo pipefail", "")

    def apply(self, text: str) -> str:
        lines: List[str] = list(self.HEADER)
        for instruction, argument in self._instructions(text):
            lines.extend(self._translate(instruction, argument))
        return "\n".join(lines) + "\n"

    @staticmethod
    def _instructions(text: str) -> List[Tuple[str, str]]:
        instructions: List[Tuple[str, str]] = []
        pending = ""
        for raw in text.splitlines():
            line = raw.strip()
            if not pending and (not line or line.startswith("#")):
                if line:
                    instructions.append(("#", line[1:].strip()))
                continue
            if line.endswith("\\"):
                pending += line[:-1].rstrip() + " "
                continue
            line = pending + line
            pending = ""
            instruction, _, argument = line.partition(" ")
            instructions.append((instruction.upper(), argument.strip()))
        if pending.strip():
            instruction, _, argument = pending.strip().partition(" ")
            instructions.append((instruction.upper(), argument.strip()))
        return instructions

    def _translate(self, instruction: str, argument: str) -> List[str]:
        if instruction == "#":
            return [f"# {argument}"]
        if instruction == "FROM":
            return [f"# Base image: {argument}"]
        if instruction == "RUN":
            return [_exec_form(argument)]
        if instruction in {"COPY", "ADD"}:
            return [_copy(argument)]
        if instruction == "WORKDIR":
            return [f"mkdir -p {argument}", f"cd {argument}"]
        if instruction == "ENV":
            return _env(argument)
        if instruction == "ARG":
            return [_arg(argument)]
        if instruction == "EXPOSE":
            return [f"# Expose port: {argument}"]
        if instruction == "CMD":
            return [f"# Default command: {_exec_form(argument)}"]
        if instruction == "ENTRYPOINT":
            return [f"# Entry point: {_exec_form(argument)}"]
        if instruction == "USER":
            return [f"# Run as user: {argument}"]
        return [f"# Unsupported instruction: {instruction} {argument}".rstrip()]


__all__ = ["DockerfileToBashRule", "SqlToJsonSchemaRule"]
