class Templates:
    """Шаблоны для генерации файлов"""

    common = """import inspect
import logging
from enum import Enum
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import quote

from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DecoratedCallable = TypeVar("DecoratedCallable", bound=Callable[..., Any])


class SendRequestError(Exception):
    def __init__(self, message, path, status_code, response_data=None):
        self.message = message
        self.path = path
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(f"[{status_code}] {path}: {message}")


class AiohttpClient:
    \"\"\"HTTP клиент на базе aiohttp\"\"\"

    def __init__(self):
        self._session: Optional[ClientSession] = None
        self._api_url: Optional[str] = None
        self._headers: Dict[str, str] = {}
        self._timeout: int = 30
        self._retries: int = 3

    def initialize(
        self,
        api_url: str,
        headers: Dict[str, str] = None,
        timeout: int = 30,
        retries: int = 3,
    ) -> "AiohttpClient":
        \"\"\"Инициализация клиента с настройками\"\"\"
        self._api_url = str(api_url).rstrip("/")
        self._headers = dict(headers or {})
        self._timeout = int(timeout) if timeout else 30
        self._retries = int(retries) if retries else 3
        return self

    async def _ensure_session(self) -> ClientSession:
        if self._session is None or self._session.closed:
            self._session = ClientSession(
                timeout=ClientTimeout(total=self._timeout),
                headers=self._headers.copy(),
            )
        return self._session

    async def send_request(
        self,
        method: str,
        path: str,
        params: Optional[List[tuple]] = None,
        json_body: Any = None,
        headers: Dict[str, str] = None,
    ) -> Any:
        if not self._api_url:
            raise SendRequestError("API URL is empty", path=path, status_code=400)

        full_url = f"{self._api_url}/{path.lstrip('/')}"
        session = await self._ensure_session()
        last_error = None

        for attempt in range(self._retries):
            try:
                logger.debug(f"Making {method} request to {full_url}")
                async with session.request(
                    method,
                    full_url,
                    params=params,
                    json=json_body,
                    headers=headers,
                ) as response:
                    if response.status >= 400:
                        raise SendRequestError(
                            response.reason,
                            path=path,
                            status_code=response.status,
                            response_data=await response.text(),
                        )
                    if response.content_length == 0 or response.status == 204:
                        return None
                    return await response.json(content_type=None)
            except ClientError as exc:
                logger.debug(f"Attempt {attempt + 1} failed: {exc}")
                last_error = exc

        raise SendRequestError(str(last_error), path=path, status_code=500)

    async def close(self):
        \"\"\"Закрытие клиента и освобождение ресурсов\"\"\"
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class ApiInterface:
    \"\"\"База сгенерированного интерфейса\"\"\"

    def __init__(self, client: AiohttpClient):
        self.client = client


def serialize_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def query_pairs(value: Any) -> List[Any]:
    value = serialize_value(value)
    values = value if isinstance(value, list) else [value]
    return [str(v).lower() if isinstance(v, bool) else v for v in values]


def parse_headers(raw_headers: List[str]) -> Dict[str, str]:
    headers = {}
    for raw_header in raw_headers:
        name, _, value = raw_header.partition(":")
        headers[name.strip()] = value.strip()
    return headers


def headers(*raw_headers: str) -> Callable[[DecoratedCallable], DecoratedCallable]:
    \"\"\"Статические заголовки метода в формате Name: value\"\"\"

    def decorator(func: DecoratedCallable) -> DecoratedCallable:
        func._static_headers = list(raw_headers)
        return func

    return decorator


def http_method(
    method: str,
    path: str,
    path_params: Dict[str, str] = None,
    query: Dict[str, str] = None,
    body: Optional[str] = None,
    response_model=None,
    many: bool = False,
) -> Callable[[DecoratedCallable], DecoratedCallable]:
    \"\"\"Базовый декоратор для HTTP методов\"\"\"

    def decorator(func: DecoratedCallable) -> DecoratedCallable:
        signature = inspect.signature(func)
        static_headers = parse_headers(getattr(func, "_static_headers", []))

        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            bound_args = signature.bind(self, *args, **kwargs)
            bound_args.apply_defaults()
            arguments = bound_args.arguments

            formatted_path = path
            for name, wire_name in (path_params or {}).items():
                value = serialize_value(arguments[name])
                formatted_path = formatted_path.replace(
                    "{" + wire_name + "}", quote(str(value), safe="")
                )

            params = []
            for name, wire_name in (query or {}).items():
                if arguments[name] is not None:
                    params.extend((wire_name, v) for v in query_pairs(arguments[name]))

            raw = await self.client.send_request(
                method,
                formatted_path,
                params=params or None,
                json_body=serialize_value(arguments[body]) if body else None,
                headers=static_headers or None,
            )

            if response_model is None:
                return None
            if many:
                return [response_model.model_validate(item) for item in raw or []]
            return response_model.model_validate(raw)

        wrapper._http_method = method
        wrapper._http_path = path
        wrapper._response_model = response_model
        return wrapper

    return decorator


def get(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("GET", path, **kwargs)


def post(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("POST", path, **kwargs)


def put(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("PUT", path, **kwargs)


def patch(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("PATCH", path, **kwargs)


def delete(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("DELETE", path, **kwargs)
"""

    client = """from simple_singleton import Singleton

from .common import AiohttpClient
from .interface import {interface_name}


class ApiClient(AiohttpClient, metaclass=Singleton):
    def __init__(self) -> None:
        super().__init__()
        self.{module_name} = {interface_name}(self)
"""

    package_init = """from .client import ApiClient
from .interface import {interface_name}
from . import enums, models

__all__ = ["ApiClient", "{interface_name}", "enums", "models"]
"""


templates = Templates()
