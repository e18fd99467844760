"""Tests for the SQL and Dockerfile rules."""

from __future__ import annotations

import json

from codeshift.rewrite.infra import DockerfileToBashRule, SqlToJsonSchemaRule


def test_sql_create_table_becomes_schema_document() -> None:
    text = (
        "CREATE TABLE IF NOT EXISTS users (\n"
        "  id INT PRIMARY KEY,\n"
        "  name VARCHAR(100) NOT NULL,\n"
        "  price decimal(10, 2),\n"
        "  PRIMARY KEY (id)\n"
        ");\n"
    )

    schema = json.loads(SqlToJsonSchemaRule().apply(text))

    table = schema["database"]["tables"]["users"]
    assert table["type"] == "table"
    assert table["columns"] == [
        {"name": "id", "type": "INT", "constraints": "PRIMARY KEY"},
        {"name": "name", "type": "VARCHAR(100)", "constraints": "NOT NULL"},
        {"name": "price", "type": "DECIMAL(10, 2)", "constraints": None},
    ]
    assert table["constraints"] == ["PRIMARY KEY (id)"]


def test_sql_without_create_table_yields_empty_tables() -> None:
    schema = json.loads(SqlToJsonSchemaRule().apply("SELECT * FROM users;"))

    assert schema == {"database": {"tables": {}}}


def test_sql_output_is_indented_json() -> None:
    output = SqlToJsonSchemaRule().apply("CREATE TABLE `t` (a INT);")

    assert output.startswith('{\n  "database": {')
    assert '"t": {' in output


def test_dockerfile_to_bash_translates_each_instruction() -> None:
    text = (
        "# build image\n"
        "FROM node:18\n"
        "ARG VERSION=1.0\n"
        "WORKDIR /app\n"
        "COPY --chown=node package.json .\n"
        "RUN apt-get update && \\\n"
        "    apt-get install -y curl\n"
        "ENV NODE_ENV=production\n"
        "ENV GREETING hello world\n"
        "USER node\n"
        "EXPOSE 3000\n"
        'CMD ["npm", "start"]\n'
        "HEALTHCHECK CMD curl localhost\n"
    )

    assert DockerfileToBashRule().apply(text) == (
        "#!/bin/bash\n"
        "set -euo pipefail\n"
        "\n"
        "# build image\n"
        "# Base image: node:18\n"
        'VERSION="${VERSION:-1.0}"\n'
        "mkdir -p /app\n"
        "cd /app\n"
        "cp -r package.json .\n"
        "apt-get update && apt-get install -y curl\n"
        "export NODE_ENV=production\n"
        "export GREETING='hello world'\n"
        "# Run as user: node\n"
        "# Expose port: 3000\n"
        "# Default command: npm start\n"
        "# Unsupported instruction: HEALTHCHECK CMD curl localhost\n"
    )


def test_dockerfile_entrypoint_uses_exec_form() -> None:
    output = DockerfileToBashRule().apply('ENTRYPOINT ["python", "-m", "app"]\n')

    assert output.endswith("# Entry point: python -m app\n")


def test_dockerfile_env_keeps_quoted_values_together() -> None:
    output = DockerfileToBashRule().apply('FROM alpine:3\nENV GREETING="hello world" B=2 EMPTY=\n')

    assert output.endswith(
        "# Base image: alpine:3\n"
        "export GREETING='hello world'\n"
        "export B=2\n"
        "export EMPTY=''\n"
    )
