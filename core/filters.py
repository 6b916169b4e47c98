"""
Product Catalog - Query Builder
===============================
Opis zapytania (QueryParams) oddzielony od jego wykonania (QueryBuilder),
żeby repozytoria budowały warunki bez dotykania klienta Supabase.

Obsługiwane są tylko operatory potrzebne katalogowi: eq, gte, lte.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union
from enum import Enum
import logging

from core.exceptions import BackendError

logger = logging.getLogger(__name__)


class FilterOperator(Enum):
    """Operator PostgREST - wartość to nazwa metody zapytania"""

    EQ = "eq"
    GTE = "gte"
    LTE = "lte"


@dataclass
class Filter:
    """Warunek kolumna-operator-wartość, np. Filter("price", FilterOperator.GTE, 100)"""
    field: str
    operator: FilterOperator
    value: Any = None


@dataclass
class Sort:
    """Klucz sortowania; domyślnie rosnąco"""
    field: str
    desc: bool = False


@dataclass
class QueryParams:
    """
    Parametry jednego zapytania listy.

    Filtry łączone są przez AND. Kolejność `sorts` ma znaczenie:
    pierwszy klucz jest główny, następne rozstrzygają remisy.

    Example:
        params = QueryParams()
        params.add_filter("category_id", "eq", 2).add_sort("price", desc=True).add_sort("id")
    """
    filters: List[Filter] = field(default_factory=list)
    sorts: List[Sort] = field(default_factory=list)
    select_fields: List[str] = field(default_factory=list)

    def add_filter(
        self,
        field: str,
        operator: Union[FilterOperator, str],
        value: Any = None
    ) -> 'QueryParams':
        self.filters.append(Filter(field, FilterOperator(operator), value))
        return self

    def add_sort(self, field: str, desc: bool = False) -> 'QueryParams':
        self.sorts.append(Sort(field, desc))
        return self


class QueryBuilder:
    """
    Zamienia QueryParams na łańcuch wywołań supabase-py i go wykonuje.

    Po execute() (także nieudanym) zapytanie wraca do `select *`,
    więc builder można użyć ponownie.

    Usage:
        rows = QueryBuilder(client, "products").apply(params).execute()
    """

    def __init__(self, client, table_name: str):
        self.client = client
        self.table_name = table_name
        self.query = None
        self._reset()

    def _reset(self):
        self.query = self.client.table(self.table_name).select('*')

    def select(self, columns: Union[str, List[str]] = '*') -> 'QueryBuilder':
        if not isinstance(columns, str):
            columns = ', '.join(columns)
        self.query = self.client.table(self.table_name).select(columns)
        return self

    def apply(self, params: QueryParams) -> 'QueryBuilder':
        """Kolumny, potem filtry, potem sortowanie"""
        if params.select_fields:
            self.select(params.select_fields)

        for f in params.filters:
            # eq/gte/lte mają tę samą sygnaturę (kolumna, wartość)
            self.query = getattr(self.query, f.operator.value)(f.field, f.value)

        for sort in params.sorts:
            self.query = self.query.order(sort.field, desc=sort.desc)

        return self

    def execute(self) -> List[Dict[str, Any]]:
        """
        Returns:
            Wiersze jako dict (pusta lista gdy brak danych)

        Raises:
            BackendError: z komunikatem Supabase
        """
        try:
            return self.query.execute().data or []
        except Exception as e:
            logger.error(f"[QueryBuilder] {self.table_name}: {e}")
            raise BackendError(getattr(e, 'message', None) or str(e)) from e
        finally:
            self._reset()
