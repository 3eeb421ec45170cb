"""
Tipos e aliases usados pelo gerador de pivot.

Apelidos semânticos para deixar as assinaturas legíveis
(nome de tabela, nome de coluna, lista de colunas descoberta).
"""

from typing import List, Literal, NewType

# Nome de tabela: "table", "schema.table" ou "catalog.schema.table"
TableName = NewType("TableName", str)

# Nome de coluna simples (sem qualificador)
ColumnName = NewType("ColumnName", str)

# Colunas descobertas no momento da geração (ordem do catálogo)
ColumnSet = List[ColumnName]

# Tipo do objeto destino criado pelo DDL
ObjectKind = Literal["TABLE", "VIEW", "TEMPORARY VIEW"]

# Status de cada tabela no resultado do lote
OutcomeStatus = Literal["success", "error"]
