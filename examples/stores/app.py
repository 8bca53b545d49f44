"""Stores: one route table, several backing stores.

Demonstrates:
- Regex-constrained captures (``:id[\\d+]``)
- ``ResourceByPrefix`` swapping the store for ``/archive`` paths
- A function middleware that short-circuits without calling ``next``
- ``url_for`` reverse routing

Run with any ASGI server:
    uvicorn app:app
"""

import threading

from junction import App, Context, HTTPError, Next, Redirect, Response
from junction.middleware import RequestLogger, ResourceByPrefix


class Store:
    """A tiny in-memory item store."""

    def __init__(self, name: str, items: dict[int, str] | None = None) -> None:
        self.name = name
        self._items = dict(items or {})
        self._lock = threading.Lock()

    def fetch(self, item_id: int) -> str:
        with self._lock:
            try:
                return self._items[item_id]
            except KeyError:
                raise HTTPError(status=404, detail=f"No item {item_id} in {self.name}") from None

    def put(self, item_id: int, value: str) -> None:
        with self._lock:
            self._items[item_id] = value


primary = Store("primary", {1: "kettle", 2: "teapot"})
archive = Store("archive", {1: "gramophone"})

app = App(resource=primary)

app.add_middleware("access", RequestLogger())
app.add_middleware("store", ResourceByPrefix({"/archive": archive}))


@app.middleware("read-only-archive")
async def read_only_archive(ctx: Context, next: Next):
    if ctx.method != "GET" and ctx.get_resource() is archive:
        return Response("The archive is read-only", status=405)
    return await next(ctx)


@app.get("/items/:id[\\d+]", name="item")
@app.get("/archive/items/:id[\\d+]", name="archived_item")
def show_item(id: int, resource: Store):
    return {"store": resource.name, "id": id, "item": resource.fetch(id)}


@app.put("/items/:id[\\d+]")
@app.put("/archive/items/:id[\\d+]")
async def put_item(id: int, ctx: Context):
    value = (await ctx.request.body()).decode()
    ctx.get_resource().put(id, value)
    return None


@app.get("/latest")
def latest():
    return Redirect(app.url_for("item", id=2))
