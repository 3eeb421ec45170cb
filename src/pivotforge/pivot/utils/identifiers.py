"""
Utilitários de identificadores SQL (Spark / Unity Catalog):
- split_table_name: valida e divide "table", "schema.table" ou "catalog.schema.table".
- quote_ident / quote_table: quoting com crase, crases internas duplicadas.
- sql_literal: literal de string com escape de barra invertida e aspas simples.
- pivoted_name: nome do destino (<tabela><sufixo>) no mesmo catalog/schema.

Limitação conhecida: só há quoting/escape; nomes não passam por nenhuma outra
sanitização. Identificadores com caracteres de controle são rejeitados.
"""

from __future__ import annotations
import re
from typing import Tuple

from pivotforge.pivot.errors import SchemaError

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def _check_no_control_chars(name: str) -> None:
    if _CONTROL_CHARS.search(name):
        raise SchemaError(f"Identificador com caractere de controle não suportado: {name!r}")


def split_table_name(name: str) -> Tuple[str, ...]:
    """
    Divide um nome de tabela em partes (1 a 3).

    Parâmetros
    - name: "table", "schema.table" ou "catalog.schema.table".

    Retorno
    - tuple[str, ...]: partes sem espaços nas bordas.

    Exceptions
    - ValueError: nome vazio, parte vazia ou mais de 3 partes.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Nome de tabela vazio.")
    parts = tuple(p.strip() for p in name.strip().split("."))
    if len(parts) > 3 or any(not p for p in parts):
        raise ValueError(
            f"Nome de tabela inválido: '{name}'. Esperado table, schema.table ou catalog.schema.table."
        )
    return parts


def quote_ident(name: str) -> str:
    """Envolve o identificador em crases, duplicando crases internas."""
    _check_no_control_chars(name)
    return "`" + name.replace("`", "``") + "`"


def quote_table(name: str) -> str:
    """Nome de tabela com cada parte entre crases (ex.: `sales`.`orders`)."""
    return ".".join(quote_ident(p) for p in split_table_name(name))


def sql_literal(text: str) -> str:
    """Literal de string Spark SQL ('...'), com escape de \\ e '."""
    _check_no_control_chars(text)
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def pivoted_name(name: str, suffix: str = "_PIVOTED") -> str:
    """
    Deriva o nome (com quoting) do destino a partir da origem.

    Ex.: "sales.orders" -> `sales`.`orders_PIVOTED`
    """
    parts = split_table_name(name)
    return ".".join(quote_ident(p) for p in (*parts[:-1], parts[-1] + suffix))
