# domain/routing/routing_path_search.py
import heapq
import math
from collections.abc import Mapping

from va_transit.app.protocols import PathSearch, TransitGraph, TravelTimeAndDisutility
from va_transit.domain.entities.network import InitialNode, Path, TransitRouterNode


class MultiNodeDijkstra(PathSearch):
    """
    Time-dependent least-cost search from many weighted sources to many weighted sinks.
    Labels are (cost, time) per node; edge costs are evaluated at the label's time.
    Single request at a time per instance.
    """

    def search(
        self,
        graph: TransitGraph,
        disutility: TravelTimeAndDisutility,
        travel_time: TravelTimeAndDisutility,
        sources: Mapping[TransitRouterNode, InitialNode],
        sinks: Mapping[TransitRouterNode, InitialNode],
        person=None,
    ) -> Path | None:
        if not sources or not sinks:
            return None

        cost: dict[int, float] = {}
        clock: dict[int, float] = {}
        prev: dict[int, tuple] = {}  # node index -> (edge, from node)
        start: dict[int, InitialNode] = {}
        heap: list[tuple[float, int, TransitRouterNode]] = []
        seq = 0

        for node, init in sources.items():
            if init.initial_cost < cost.get(node.index, math.inf):
                cost[node.index] = init.initial_cost
                clock[node.index] = init.initial_time
                start[node.index] = init
                seq += 1
                heapq.heappush(heap, (init.initial_cost, seq, node))

        sink_rank = {n.index: i for i, n in enumerate(sinks)}
        best_total, best_sink = math.inf, None
        settled: set[int] = set()

        while heap:
            c, _, node = heapq.heappop(heap)
            if node.index in settled or c > cost.get(node.index, math.inf):
                continue  # stale
            if c >= best_total:
                break
            settled.add(node.index)

            if node.index in sink_rank:
                total = c + sinks[node].initial_cost
                if total < best_total or (
                    best_sink is not None
                    and total == best_total
                    and sink_rank[node.index] < sink_rank[best_sink.index]
                ):
                    best_total, best_sink = total, node

            t = clock[node.index]
            for edge in graph.out_edges(node):
                nxt = edge.to_node
                if nxt.index in settled:
                    continue
                dt = travel_time.link_travel_time(edge, t, person)
                if not math.isfinite(dt):
                    continue  # route never departs again
                nc = c + disutility.link_travel_disutility(edge, t, person)
                if nc < cost.get(nxt.index, math.inf):
                    cost[nxt.index] = nc
                    clock[nxt.index] = t + dt
                    prev[nxt.index] = (edge, node)
                    start.pop(nxt.index, None)
                    seq += 1
                    heapq.heappush(heap, (nc, seq, nxt))

        if best_sink is None:
            return None
        return self._backtrack(best_sink, cost, clock, prev, start)

    @staticmethod
    def _backtrack(sink, cost, clock, prev, start) -> Path:
        nodes, edges = [sink], []
        cur = sink
        while cur.index in prev:
            edge, cur = prev[cur.index]
            edges.append(edge)
            nodes.append(cur)
        nodes.reverse()
        edges.reverse()
        origin = start[nodes[0].index]
        return Path(
            nodes=tuple(nodes),
            edges=tuple(edges),
            travel_time=clock[sink.index] - origin.initial_time,
            travel_cost=cost[sink.index] - origin.initial_cost,
        )
