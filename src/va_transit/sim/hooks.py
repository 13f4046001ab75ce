# sim/hooks.py
from typing import Protocol, runtime_checkable


@runtime_checkable
class RouterHooks(Protocol):
    def router_start(self, *, surcharge_on, instance): ...
    def route_start(self, *, person_id, origin, destination, t): ...
    def candidates(self, *, side, point, n, extended): ...
    def no_path(self, *, person_id, t, fallback): ...
    def direct_chosen(self, *, person_id, t, direct_cost, path_cost): ...
    def route_end(self, *, person_id, t, legs, pt_legs, direct): ...
    def error(self, *, person_id, t, exc: BaseException): ...
    def biz(self, ev): ...


class NoopHooks:
    def router_start(self, **_):
        pass

    def route_start(self, **_):
        pass

    def candidates(self, **_):
        pass

    def no_path(self, **_):
        pass

    def direct_chosen(self, **_):
        pass

    def route_end(self, **_):
        pass

    def error(self, **_):
        pass

    def biz(self, *_):
        pass
