from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from qrdine.application.dto.requests import TableRequest
from qrdine.application.dto.responses import MessageResponse, TableResponse, TablesResponse
from qrdine.application.mappers.table_mapper import to_table_response
from qrdine.application.ports.repositories import TableRepository
from qrdine.application.use_cases.validation import rejecting_invalid_input
from qrdine.domain.common.ids import TableId, TableNumber
from qrdine.domain.table.entities import DiningTable, TableStatus


class TableNotFoundError(Exception):
    pass


class DuplicateTableNumberError(Exception):
    pass


def load_table(table_repository: TableRepository, table_id: TableId) -> DiningTable:
    table = table_repository.get(table_id)
    if table is None:
        raise TableNotFoundError(f"table {table_id} not found")
    return table


class ListTables:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self) -> TablesResponse:
        tables = sorted(self._table_repository.list_all(), key=lambda table: table.created_at)
        return TablesResponse(tables=[to_table_response(table) for table in tables])


class GetTable:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, table_id: TableId) -> TableResponse:
        return to_table_response(load_table(self._table_repository, table_id))


class GetTableByNumber:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, number: TableNumber) -> TableResponse:
        table = self._table_repository.get_by_number(number)
        if table is None:
            raise TableNotFoundError(f"table number {number} not found")
        return to_table_response(table)


class CreateTable:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, request_dto: TableRequest) -> TableResponse:
        number = TableNumber(request_dto.number.strip())
        if self._table_repository.get_by_number(number) is not None:
            raise DuplicateTableNumberError(f"table number {number} already exists")

        now = datetime.now(timezone.utc)
        with rejecting_invalid_input():
            table = DiningTable(
                table_id=TableId(f"tbl_{uuid4().hex[:12]}"),
                number=number,
                name=request_dto.name.strip(),
                capacity=request_dto.capacity,
                location=request_dto.location.strip(),
                status=TableStatus(request_dto.status or TableStatus.AVAILABLE.value),
                created_at=now,
                updated_at=now,
            )
        self._table_repository.add(table)
        return to_table_response(table)


class UpdateTable:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, table_id: TableId, request_dto: TableRequest) -> TableResponse:
        table = load_table(self._table_repository, table_id)
        number = TableNumber(request_dto.number.strip())
        if number != table.number:
            other = self._table_repository.get_by_number(number)
            if other is not None and other.table_id != table.table_id:
                raise DuplicateTableNumberError(f"table number {number} already exists")

        with rejecting_invalid_input():
            updated = replace(
                table,
                number=number,
                name=request_dto.name.strip(),
                capacity=request_dto.capacity,
                location=request_dto.location.strip(),
                status=TableStatus(request_dto.status) if request_dto.status else table.status,
                updated_at=datetime.now(timezone.utc),
            )
        self._table_repository.update(updated)
        return to_table_response(updated)


class DeleteTable:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, table_id: TableId) -> MessageResponse:
        if not self._table_repository.delete(table_id):
            raise TableNotFoundError(f"table {table_id} not found")
        return MessageResponse(message=f"table {table_id} deleted")
