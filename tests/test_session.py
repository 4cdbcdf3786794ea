import threading
import time

from cardbattle import protocol
from cardbattle.engine.messages import Connected, Direct, Err
from cardbattle.session import Active, Initializing, Session
from cardbattle.store import Create, Delete, Receive, StateStore


class RecordingStore:
    def __init__(self):
        self.events = []

    def submit(self, event):
        self.events.append(event)


def _session(store=None, spawn=None):
    sent = []
    session = Session("sid-1", transport=sent.append, store=store or RecordingStore(), spawn=spawn)
    return session, sent


def test_open_submits_create_and_waits_for_id():
    session, sent = _session()
    session.open()
    assert session.store.events == [Create(session=session)]
    assert session.status == Initializing()

    session.receive('{"type": "Chat", "to": 0, "text": "early"}')
    assert session.store.events == [Create(session=session)]


def test_connected_activates_and_forwards():
    session, sent = _session()
    session.open()
    session.publish(Connected(id=7))
    assert session.status == Active(player_id=7)
    assert sent == [protocol.encode(Connected(id=7))]

    session.receive("payload")
    assert session.store.events[-1] == Receive(player_id=7, text="payload")


def test_close_submits_delete_once():
    session, _ = _session()
    session.publish(Connected(id=3))
    session.close()
    session.close()
    assert session.store.events.count(Delete(player_id=3)) == 1


def test_close_before_connected_deletes_when_id_arrives():
    session, sent = _session()
    session.open()
    session.close()
    assert Delete(player_id=0) not in session.store.events

    session.publish(Connected(id=0))
    assert session.store.events[-1] == Delete(player_id=0)
    assert sent == []


def test_messages_after_close_are_not_sent():
    session, sent = _session()
    session.publish(Connected(id=1))
    session.close()
    session.publish(Err(text="late"))
    assert sent == [protocol.encode(Connected(id=1))]


def test_two_sessions_chat_through_real_store():
    store = StateStore(inline=True)
    alice, alice_sent = _session(store)
    bob, bob_sent = _session(store)
    alice.open()
    bob.open()
    assert alice.player_id == 0 and bob.player_id == 1

    alice.receive('{"type": "Chat", "to": 1, "text": "hello"}')
    assert bob_sent[-1] == protocol.encode(Direct(sender=0, text="hello"))

    bob.close()
    assert 1 not in store.state.players


def test_writer_task_delivers_in_order():
    threads = []

    def spawn(fn):
        thread = threading.Thread(target=fn, daemon=True)
        threads.append(thread)
        thread.start()

    session, sent = _session(spawn=spawn)
    session.open()
    session.publish(Connected(id=2))
    session.publish(Err(text="one"))
    session.publish(Err(text="two"))
    deadline = time.time() + 5.0
    while len(sent) < 3 and time.time() < deadline:
        time.sleep(0.01)
    session.close()
    threads[0].join(timeout=5)

    assert sent == [protocol.encode(m) for m in (Connected(id=2), Err(text="one"), Err(text="two"))]
    assert session.store.events[-1] == Delete(player_id=2)
