"""Tests for free list navigation in PlaylistManager."""

import random

from bot_playlists.domain.playback.state import LoopMode
from bot_playlists.domain.playlists.manager import QUEUE_LIST_NAME, TRASH_LIST_NAME
from bot_playlists.domain.playlists.results import ErrorKind
from conftest import make_item, make_playlist


def _ids(items):
    return [item.resource.resource_id for item in items]


class TestEmptyFreeList:
    def test_navigation_on_empty_list_returns_none(self, manager):
        assert manager.current() is None
        assert manager.next() is None
        assert manager.previous() is None
        assert manager.next(manually=False) is None


class TestLinearNavigation:
    """Navigation with the random flag off."""

    def test_play_freelist_starts_at_top(self, manager):
        manager.play_freelist(make_playlist("mix", 3))

        assert manager.index == 0
        assert manager.current().resource.resource_id == "res0"

    def test_next_marks_item_as_from_playlist(self, manager):
        manager.play_freelist(make_playlist("mix", 3))

        item = manager.next()

        assert item.resource.resource_id == "res1"
        assert item.meta.from_playlist is True

    def test_automatic_next_stops_at_end_with_loop_off(self, manager):
        manager.play_freelist(make_playlist("mix", 3))
        manager.index = 2

        assert manager.next(manually=False) is None
        assert manager.index == 2

    def test_manual_next_wraps_with_loop_off(self, manager):
        manager.play_freelist(make_playlist("mix", 3))
        manager.index = 2

        assert manager.next().resource.resource_id == "res0"

    def test_manual_previous_wraps_to_last(self, manager):
        manager.play_freelist(make_playlist("mix", 3))

        assert manager.previous().resource.resource_id == "res2"

    def test_loop_all_wraps_automatically(self, manager):
        manager.play_freelist(make_playlist("mix", 3))
        manager.loop = LoopMode.ALL
        manager.index = 2

        assert manager.next(manually=False).resource.resource_id == "res0"

    def test_loop_one_repeats_on_automatic_advance(self, manager):
        manager.play_freelist(make_playlist("mix", 3))
        manager.loop = LoopMode.ONE
        manager.index = 1

        assert manager.next(manually=False).resource.resource_id == "res1"
        assert manager.previous(manually=False).resource.resource_id == "res1"
        assert manager.index == 1

    def test_loop_one_still_moves_on_manual_request(self, manager):
        manager.play_freelist(make_playlist("mix", 3))
        manager.loop = LoopMode.ONE

        assert manager.next().resource.resource_id == "res1"

    def test_shrinking_list_keeps_current_valid(self, manager):
        manager.play_freelist(make_playlist("mix", 5))
        manager.index = 4

        manager.free_list.remove_at(4)
        manager.free_list.remove_at(3)

        assert manager.current().resource.resource_id == "res1"
        assert manager.index == 1


class TestRandomNavigation:
    """Navigation with the random flag on."""

    def test_automatic_pass_visits_every_item_once(self, manager):
        manager.random = True
        manager.play_freelist(make_playlist("mix", 10))
        visited = [manager.current()]

        for _ in range(9):
            item = manager.next(manually=False)
            assert item is not None
            visited.append(item)

        assert sorted(_ids(visited)) == sorted(f"res{i}" for i in range(10))
        last_index = manager.index
        assert manager.next(manually=False) is None
        assert manager.index == last_index

    def test_loop_all_keeps_playing_after_a_pass(self, manager):
        manager.random = True
        manager.loop = LoopMode.ALL
        manager.play_freelist(make_playlist("mix", 4))

        items = [manager.next(manually=False) for _ in range(12)]

        assert all(item is not None for item in items)

    def test_new_seed_after_each_pass(self, manager, monkeypatch):
        seeds = iter([111, 222, 333])
        monkeypatch.setattr(random, "randrange", lambda _stop: next(seeds))
        manager.random = True
        manager.loop = LoopMode.ALL
        manager.play_freelist(make_playlist("mix", 5))
        assert manager.seed == 111

        for _ in range(5):
            manager.next(manually=False)

        assert manager.seed == 222

    def test_toggling_random_keeps_index(self, manager):
        manager.play_freelist(make_playlist("mix", 6))
        manager.index = 3

        manager.random = True
        assert manager.index == 3
        assert manager.current().resource.resource_id == "res3"

        manager.random = False
        assert manager.index == 3

    def test_random_previous_retraces_next(self, manager):
        manager.random = True
        manager.play_freelist(make_playlist("mix", 8))

        forward = [manager.next() for _ in range(3)]
        backward = [manager.previous() for _ in range(2)]

        assert _ids(backward) == _ids([forward[1], forward[0]])


class TestFreeListEditing:
    def test_add_single_returns_position(self, manager):
        assert manager.add_to_freelist(make_item("a")) == 0
        assert manager.add_to_freelist(make_item("b")) == 1

    def test_add_batch_returns_none(self, manager):
        assert manager.add_to_freelist([make_item("a"), make_item("b")]) is None
        assert manager.free_list.count == 2

    def test_insert_goes_after_current(self, manager):
        manager.play_freelist(make_playlist("mix", 3))
        manager.index = 1

        position = manager.insert_to_freelist(make_item("next-up"))

        assert position == 2
        assert _ids(manager.free_list) == ["res0", "res1", "next-up", "res2"]

    def test_insert_into_empty_list(self, manager):
        assert manager.insert_to_freelist(make_item("only")) == 0

    def test_play_freelist_copies_items(self, manager):
        playlist = make_playlist("mix", 2)

        manager.play_freelist(playlist)
        manager.next()

        assert manager.free_list.get_resource(1) is not playlist.get_resource(1)
        assert playlist.get_resource(1).meta.from_playlist is False

    def test_play_freelist_replaces_previous_content(self, manager):
        manager.add_to_freelist(make_item("old"))

        manager.play_freelist(make_playlist("mix", 2))

        assert _ids(manager.free_list) == ["res0", "res1"]

    def test_trash_holds_copies(self, manager):
        item = make_item("a")
        manager.add_to_freelist(item)

        manager.add_to_trash(item)
        manager.add_to_trash([make_item("b"), make_item("c")])

        assert manager.trash_list.count == 3
        assert manager.trash_list.get_resource(0) is not item
        assert manager.trash_list.get_resource(0).resource == item.resource

    def test_clear_lists(self, manager):
        manager.add_to_freelist(make_item("a"))
        manager.add_to_trash(make_item("b"))

        manager.clear_freelist()
        manager.clear_trash()

        assert manager.free_list.count == 0
        assert manager.trash_list.count == 0


class TestSpecialPlaylists:
    def test_queue_is_the_free_list(self, manager):
        result = manager.load_playlist(QUEUE_LIST_NAME)

        assert result
        assert result.value is manager.free_list

    def test_trash_is_the_trash_list(self, manager):
        result = manager.load_playlist(TRASH_LIST_NAME)

        assert result
        assert result.value is manager.trash_list

    def test_unknown_special_name(self, manager):
        result = manager.load_playlist(".history")

        assert not result
        assert result.error.kind is ErrorKind.SPECIAL_NOT_FOUND
        assert ".history" in result.error.message
