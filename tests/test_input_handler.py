"""
Tests for the InputHandler tick loop.

Tests cover:
- Agent registration
- The two-phase handle() loop and FIFO interaction order
- Feed precedence
- Bulk grabber helpers
- Dispatch records
"""

import json

from gestura import Agent, EventGrabberTuple, InputHandler
from gestura import logging as glog
from gestura.events import MotionEvent2, TapEvent


class CollectingSink(glog.LogSink):
    def __init__(self):
        self.records = []

    def emit(self, module, record):
        self.records.append((module, record))

    def flush(self):
        pass

    def close(self):
        pass


class TestAgentRegistration:
    """Tests for register/unregister."""

    def test_register(self, handler):
        agent = Agent()
        assert handler.register_agent(agent)
        assert not handler.register_agent(agent)
        assert handler.agents == [agent]

    def test_register_none(self, handler):
        assert not handler.register_agent(None)

    def test_unregister(self, handler, agent):
        assert handler.unregister_agent(agent)
        assert not handler.unregister_agent(agent)
        assert not agent.is_registered()

    def test_unregister_unknown_agent_warns(self, handler, capsys):
        assert not handler.unregister_agent(Agent())
        assert not handler.unregister_agent(None)
        out = capsys.readouterr().out
        assert out.count('[input_handler] WARN') == 2

    def test_unregister_agents(self, handler):
        Agent(handler)
        Agent(handler)
        handler.unregister_agents()
        assert handler.agents == []

    def test_iteration_order(self, handler):
        agents = [Agent(handler) for _ in range(3)]
        assert list(handler) == agents


class TestHandleLoop:
    """Tests for InputHandler.handle()."""

    def test_end_to_end_routing(self, handler, feed_agent, make_grabber):
        """Two grabbers split the plane at x=50."""
        left = make_grabber('left', accepts=lambda e: e.x < 50)
        right = make_grabber('right', accepts=lambda e: e.x >= 50)
        feed_agent.add_grabber(left)
        feed_agent.add_grabber(right)

        feed_agent.next_feed = TapEvent(x=10, y=0)
        assert handler.handle() == 1
        feed_agent.next_feed = TapEvent(x=80, y=0)
        assert handler.handle() == 1

        assert [e.x for e in left.interactions] == [10]
        assert [e.x for e in right.interactions] == [80]
        assert len(handler.tuple_queue) == 0

    def test_fifo_order(self, handler, make_grabber):
        log = []
        a, b = Agent(handler), Agent(handler)
        ga = make_grabber('a', log=log)
        gb = make_grabber('b', log=log)
        a.add_grabber(ga)
        a.set_default_grabber(ga)
        b.add_grabber(gb)
        b.set_default_grabber(gb)

        b.handle(TapEvent(x=1, y=1))
        a.handle(TapEvent(x=2, y=2))
        a.handle(TapEvent(x=3, y=3))
        handler.handle()

        assert [(name, e.x) for name, e in log] == [('b', 1), ('a', 2), ('a', 3)]

    def test_interactions_run_after_all_agents(self, handler, make_grabber):
        """No interaction runs during the producer phase."""
        seen = []

        class Probe(Agent):
            def __init__(self, handler, grabber):
                super().__init__(handler)
                self.grabber = grabber

            def feed(self):
                seen.append(len(self.grabber.interactions))
                return TapEvent(x=0, y=0)

        g = make_grabber()
        first = Probe(handler, g)
        second = Probe(handler, g)
        for agent in (first, second):
            agent.add_grabber(g)
            agent.set_default_grabber(g)

        assert handler.handle() == 2
        assert seen == [0, 0]
        assert len(g.interactions) == 2

    def test_tick_counter(self, handler):
        assert handler.tick == 0
        handler.handle()
        handler.handle()
        assert handler.tick == 2

    def test_empty_handle(self, handler):
        assert handler.handle() == 0

    def test_null_motion_not_dispatched(self, handler, feed_agent, make_grabber):
        g = make_grabber(accepts=lambda e: True)
        feed_agent.add_grabber(g)
        feed_agent.next_feed = MotionEvent2(x=1, y=1)

        assert handler.handle() == 0
        assert feed_agent.tracked_grabber is g
        assert g.interactions == []


class TestFeeds:
    """Tests for feed precedence."""

    def test_feed_used_for_both(self, handler, feed_agent, make_grabber):
        g = make_grabber(accepts=lambda e: True)
        feed_agent.add_grabber(g)
        event = TapEvent(x=1, y=1)
        feed_agent.next_feed = event

        handler.handle()
        assert g.tracked == [event]
        assert g.interactions == [event]
        assert feed_agent.feed_calls == 1

    def test_dedicated_feeds_win(self, handler, feed_agent, make_grabber):
        g = make_grabber(accepts=lambda e: True)
        feed_agent.add_grabber(g)
        poll_event = TapEvent(x=1, y=1)
        handle_event = TapEvent(x=2, y=2)
        feed_agent.next_feed = TapEvent(x=3, y=3)
        feed_agent.next_poll_feed = poll_event
        feed_agent.next_handle_feed = handle_event

        handler.handle()
        assert g.tracked == [poll_event]
        assert g.interactions == [handle_event]
        assert feed_agent.feed_calls == 0

    def test_feed_fills_missing_handle_feed(self, handler, feed_agent, make_grabber):
        g = make_grabber(accepts=lambda e: True)
        feed_agent.add_grabber(g)
        poll_event = TapEvent(x=1, y=1)
        generic = TapEvent(x=3, y=3)
        feed_agent.next_poll_feed = poll_event
        feed_agent.next_feed = generic

        handler.handle()
        assert g.tracked == [poll_event]
        assert g.interactions == [generic]
        assert feed_agent.feed_calls == 1


class TestBulkHelpers:
    """Grabber helpers applied to every registered agent."""

    def test_add_and_remove(self, handler, make_grabber):
        a, b = Agent(handler), Agent(handler)
        g = make_grabber()

        handler.add_grabber(g)
        assert a.has_grabber(g) and b.has_grabber(g)
        assert handler.has_grabber(g)

        handler.remove_grabber(g)
        assert not handler.has_grabber(g)

    def test_remove_skips_agents_without_grabber(self, handler, make_grabber, capsys):
        a, b = Agent(handler), Agent(handler)
        g = make_grabber()
        a.add_grabber(g)
        handler.remove_grabber(g)
        assert not a.has_grabber(g)
        assert 'WARN' not in capsys.readouterr().out

    def test_remove_grabbers(self, handler, make_grabber):
        a = Agent(handler)
        handler.add_grabber(make_grabber())
        handler.remove_grabbers()
        assert a.grabbers == []

    def test_default_and_input_grabber(self, handler, make_grabber):
        a, b = Agent(handler), Agent(handler)
        g1, g2 = make_grabber('g1'), make_grabber('g2')
        handler.add_grabber(g1)
        handler.add_grabber(g2)

        handler.set_default_grabber(g1)
        assert a.default_grabber is g1 and b.default_grabber is g1
        assert handler.is_input_grabber(g1)

        handler.shift_default_grabber(g1, g2)
        assert a.default_grabber is g2
        assert not handler.is_input_grabber(g1)

    def test_reset_tracked_grabber(self, handler, make_grabber):
        a = Agent(handler)
        g = make_grabber(accepts=lambda e: True)
        a.add_grabber(g)
        a.poll(TapEvent(x=0, y=0))
        handler.reset_tracked_grabber()
        assert a.tracked_grabber is None


class TestTupleQueue:
    """Tests for manual queue manipulation."""

    def test_enqueue_manual_tuple(self, handler, make_grabber):
        g = make_grabber()
        assert handler.enqueue_tuple(EventGrabberTuple(TapEvent(x=0, y=0), g))
        assert handler.handle() == 1
        assert len(g.interactions) == 1

    def test_enqueue_none(self, handler):
        assert not handler.enqueue_tuple(None)

    def test_remove_tuple(self, handler, make_grabber):
        g = make_grabber()
        t = EventGrabberTuple(TapEvent(x=0, y=0), g)
        handler.enqueue_tuple(t)

        assert handler.remove_tuple(t)
        assert not handler.remove_tuple(t)
        assert handler.handle() == 0
        assert g.interactions == []

    def test_remove_tuples(self, handler, make_grabber):
        g = make_grabber()
        handler.enqueue_tuple(EventGrabberTuple(TapEvent(x=0, y=0), g))
        handler.enqueue_tuple(EventGrabberTuple(TapEvent(x=1, y=0), g))
        handler.remove_tuples()
        assert handler.handle() == 0

    def test_consumed_tuple_not_counted(self, handler, make_grabber):
        g = make_grabber()
        t = EventGrabberTuple(TapEvent(x=0, y=0), g)
        t.interact()
        handler.enqueue_tuple(t)
        assert handler.handle() == 0
        assert len(g.interactions) == 1


class TestDispatchRecords:
    """Structured records for executed interactions."""

    def test_record_per_interaction(self, handler, make_grabber):
        sink = CollectingSink()
        glog.register_sink('dispatch', sink)
        g = make_grabber()
        handler.enqueue_tuple(EventGrabberTuple(TapEvent(x=0, y=0, id=4).fire(), g))

        handler.handle()

        assert len(sink.records) == 1
        module, record = sink.records[0]
        assert module == 'dispatch'
        assert record['type'] == 'interaction'
        assert record['tick'] == 1
        assert record['event'] == 'tap'
        assert record['id'] == 4
        assert record['fired'] is True
        assert record['grabber'] == 'RecordingGrabber'

    def test_file_sink(self, handler, make_grabber, tmp_path):
        sink = glog.FileSink(log_dir=str(tmp_path), session_name='test')
        glog.register_sink('dispatch', sink)
        handler.enqueue_tuple(EventGrabberTuple(TapEvent(x=0, y=0), make_grabber()))
        handler.handle()
        glog.close_all_sinks()

        lines = (tmp_path / 'test_dispatch.jsonl').read_text().splitlines()
        records = [json.loads(line) for line in lines]
        assert [r['type'] for r in records] == ['interaction']

    def test_environment_enables_records(self, handler, make_grabber, tmp_path, monkeypatch):
        """GESTURA_LOGGING_DISPATCH_ENABLED creates a FileSink on first dispatch."""
        monkeypatch.setenv('GESTURA_LOGGING_DISPATCH_ENABLED', 'true')
        monkeypatch.setenv('GESTURA_LOGGING_DISPATCH_DIR', str(tmp_path))
        handler.enqueue_tuple(EventGrabberTuple(TapEvent(x=0, y=0, id=2), make_grabber()))
        handler.handle()

        assert isinstance(glog.get_sink('dispatch'), glog.FileSink)
        glog.close_all_sinks()

        files = list(tmp_path.glob('*_dispatch.jsonl'))
        assert len(files) == 1
        records = [json.loads(line) for line in files[0].read_text().splitlines()]
        assert len(records) == 1
        assert records[0]['event'] == 'tap'
        assert records[0]['id'] == 2

    def test_records_disabled_by_default(self, handler, make_grabber, monkeypatch):
        monkeypatch.delenv('GESTURA_LOGGING_DISPATCH_ENABLED', raising=False)
        handler.enqueue_tuple(EventGrabberTuple(TapEvent(x=0, y=0), make_grabber()))
        handler.handle()
        assert isinstance(glog.get_sink('dispatch'), glog.NullSink)

    def test_dispatch_trace(self, handler, make_grabber, capsys):
        glog.configure_logging(level='DEBUG', dispatch=True)
        handler.enqueue_tuple(EventGrabberTuple(TapEvent(x=0, y=0), make_grabber()))
        handler.handle()
        assert 'DISPATCH: tick 1' in capsys.readouterr().out
