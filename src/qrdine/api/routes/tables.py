from __future__ import annotations

from fastapi import APIRouter, Depends, status

from qrdine.api.security import Principal, require_admin, require_staff
from qrdine.application.dto.requests import TableRequest
from qrdine.application.dto.responses import (
    MessageResponse,
    OrdersResponse,
    TableResponse,
    TablesResponse,
)
from qrdine.application.use_cases.list_orders import ListTableOrders
from qrdine.application.use_cases.manage_tables import (
    CreateTable,
    DeleteTable,
    GetTable,
    GetTableByNumber,
    ListTables,
    UpdateTable,
)
from qrdine.domain.common.ids import TableId, TableNumber
from qrdine.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from qrdine.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository

router = APIRouter(tags=["tables"])


def _list_tables_use_case() -> ListTables:
    return ListTables(table_repository=SqlAlchemyTableRepository())


def _get_table_use_case() -> GetTable:
    return GetTable(table_repository=SqlAlchemyTableRepository())


def _get_table_by_number_use_case() -> GetTableByNumber:
    return GetTableByNumber(table_repository=SqlAlchemyTableRepository())


def _create_table_use_case() -> CreateTable:
    return CreateTable(table_repository=SqlAlchemyTableRepository())


def _update_table_use_case() -> UpdateTable:
    return UpdateTable(table_repository=SqlAlchemyTableRepository())


def _delete_table_use_case() -> DeleteTable:
    return DeleteTable(table_repository=SqlAlchemyTableRepository())


def _list_table_orders_use_case() -> ListTableOrders:
    return ListTableOrders(order_repository=SqlAlchemyOrderRepository())


@router.get("/v1/tables", response_model=TablesResponse)
def list_tables(_: Principal = Depends(require_staff)) -> TablesResponse:
    return _list_tables_use_case().execute()


@router.post(
    "/v1/tables",
    response_model=TableResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_table(
    request_dto: TableRequest,
    _: Principal = Depends(require_admin),
) -> TableResponse:
    return _create_table_use_case().execute(request_dto)


@router.get("/v1/tables/{table_id}", response_model=TableResponse)
def get_table(table_id: str, _: Principal = Depends(require_staff)) -> TableResponse:
    return _get_table_use_case().execute(table_id=TableId(table_id))


@router.put("/v1/tables/{table_id}", response_model=TableResponse)
def update_table(
    table_id: str,
    request_dto: TableRequest,
    _: Principal = Depends(require_admin),
) -> TableResponse:
    return _update_table_use_case().execute(table_id=TableId(table_id), request_dto=request_dto)


@router.delete("/v1/tables/{table_id}", response_model=MessageResponse)
def delete_table(table_id: str, _: Principal = Depends(require_admin)) -> MessageResponse:
    return _delete_table_use_case().execute(table_id=TableId(table_id))


# Diners reach these by scanning the table's QR code, so no login is required.
@router.get("/v1/table-numbers/{number}", response_model=TableResponse)
def get_table_by_number(number: str) -> TableResponse:
    return _get_table_by_number_use_case().execute(number=TableNumber(number))


@router.get("/v1/table-numbers/{number}/orders", response_model=OrdersResponse)
def list_table_orders(number: str) -> OrdersResponse:
    return _list_table_orders_use_case().execute(table_number=TableNumber(number))
