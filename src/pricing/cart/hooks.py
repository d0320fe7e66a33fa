"""Mutation hooks invoked by a cart around every change.

Before-hooks (``adding``, ``updating``, ``removing``, ``clearing``) may veto
the change by returning ``False``; the cart then leaves its state untouched
and the public method returns ``False``. After-hooks are notifications.
"""

from typing import Any, Protocol


class CartHooks:
    """No-op hooks that allow every mutation."""

    def created(self, cart) -> None:
        pass

    def adding(self, item, cart) -> bool:
        return True

    def added(self, item, cart) -> None:
        pass

    def updating(self, data, cart) -> bool:
        return True

    def updated(self, item, cart) -> None:
        pass

    def removing(self, item_id, cart) -> bool:
        return True

    def removed(self, item_id, cart) -> None:
        pass

    def clearing(self, cart) -> bool:
        return True

    def cleared(self, cart) -> None:
        pass


class EventSink(Protocol):
    def fire(self, event_name: str, payload: list) -> Any: ...


class EventSinkHooks(CartHooks):
    """Forward every hook to an event dispatcher as ``"<instance>.<event>"``.

    The payload is ``[data, cart]``. A before-event is vetoed only when the
    sink returns exactly ``False``; ``None``, ``0``, ``""`` or any other value
    lets the mutation proceed.
    """

    def __init__(self, sink: EventSink):
        self.sink = sink

    def _fire(self, event: str, data, cart):
        return self.sink.fire(f"{cart.instance_name}.{event}", [data, cart])

    def _allows(self, event: str, data, cart) -> bool:
        return self._fire(event, data, cart) is not False

    def created(self, cart) -> None:
        self._fire("created", None, cart)

    def adding(self, item, cart) -> bool:
        return self._allows("adding", item, cart)

    def added(self, item, cart) -> None:
        self._fire("added", item, cart)

    def updating(self, data, cart) -> bool:
        return self._allows("updating", data, cart)

    def updated(self, item, cart) -> None:
        self._fire("updated", item, cart)

    def removing(self, item_id, cart) -> bool:
        return self._allows("removing", item_id, cart)

    def removed(self, item_id, cart) -> None:
        self._fire("removed", item_id, cart)

    def clearing(self, cart) -> bool:
        return self._allows("clearing", None, cart)

    def cleared(self, cart) -> None:
        self._fire("cleared", None, cart)
