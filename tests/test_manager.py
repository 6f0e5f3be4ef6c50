from pathlib import Path

import pytest

from todo.errors import AlreadyCompleted, EmptyDescription, NotFound, SaveError
from todo.manager import TodoManager
from todo.storage import FileStorage

from .fakes import MemoryStorage


def test_add_trims_and_numbers_from_one(manager: TodoManager, memory_storage: MemoryStorage) -> None:
    assert manager.add("  Buy milk \n") == 1
    assert manager.add("Walk dog") == 2
    assert [t.description for t in manager.list_tasks()] == ["Buy milk", "Walk dog"]
    assert memory_storage.saves == 2


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_add_rejects_empty_description(
    manager: TodoManager, memory_storage: MemoryStorage, text: str
) -> None:
    with pytest.raises(EmptyDescription):
        manager.add(text)
    assert len(manager) == 0
    assert memory_storage.saves == 0


def test_ids_are_never_reused(manager: TodoManager) -> None:
    seen = []
    for step in range(3):
        seen.append(manager.add(f"task {step}"))
    manager.remove(seen[-1])
    seen.append(manager.add("after removing the newest"))
    manager.remove(seen[0])
    seen.append(manager.add("after removing the oldest"))
    assert seen == [1, 2, 3, 4, 5]


def test_high_water_mark_survives_reload(memory_storage: MemoryStorage) -> None:
    first = TodoManager(memory_storage)
    first.add("a")
    first.add("b")
    first.remove(2)

    second = TodoManager(memory_storage)
    assert second.add("c") == 3


def test_next_id_follows_loaded_records() -> None:
    storage = MemoryStorage(["7|old|0|2024-01-01 09:00:00|"])
    assert TodoManager(storage).add("new") == 8


def test_complete_twice(manager: TodoManager) -> None:
    manager.add("x")
    task = manager.complete(1)
    assert task.completed is True
    stamp = task.completed_at
    assert stamp

    with pytest.raises(AlreadyCompleted):
        manager.complete(1)
    assert manager.get(1).completed_at == stamp


def test_complete_missing(manager: TodoManager, memory_storage: MemoryStorage) -> None:
    with pytest.raises(NotFound) as info:
        manager.complete(99)
    assert info.value.task_id == 99
    assert memory_storage.saves == 0


def test_remove_keeps_order_and_ids(manager: TodoManager, memory_storage: MemoryStorage) -> None:
    for text in ("a", "b", "c"):
        manager.add(text)
    removed = manager.remove(2)
    assert removed.description == "b"
    assert [t.id for t in manager] == [1, 3]
    assert [line.split("|")[0] for line in memory_storage.lines] == ["1", "3"]


def test_remove_missing(manager: TodoManager) -> None:
    with pytest.raises(NotFound):
        manager.remove(1)


def test_list_tasks_is_restartable_snapshot(manager: TodoManager) -> None:
    manager.add("a")
    it = manager.list_tasks()
    manager.add("b")
    assert [t.id for t in it] == [1]
    assert [t.id for t in manager.list_tasks()] == [1, 2]
    assert [t.id for t in manager.list_tasks()] == [1, 2]


def test_failed_save_keeps_memory_state(manager: TodoManager, memory_storage: MemoryStorage) -> None:
    manager.add("persisted")
    memory_storage.fail = True

    with pytest.raises(SaveError) as info:
        manager.add("only in memory")
    assert info.value.task_id == 2
    assert isinstance(info.value.__cause__, OSError)
    assert [t.id for t in manager] == [1, 2]
    assert len(memory_storage.lines) == 1

    with pytest.raises(SaveError):
        manager.complete(1)
    assert manager.get(1).completed is True


def test_end_to_end_on_disk(tasks_path: Path) -> None:
    manager = TodoManager(FileStorage(str(tasks_path)))
    assert manager.add("Buy milk") == 1
    assert len(tasks_path.read_text(encoding="utf-8").splitlines()) == 1
    assert manager.add("Walk dog") == 2

    manager.complete(1)
    assert manager.get(1).completed is True
    manager.remove(1)

    reloaded = TodoManager(FileStorage(str(tasks_path)))
    assert [(t.id, t.description) for t in reloaded] == [(2, "Walk dog")]
    assert reloaded.add("Call mum") == 3


def test_complete_missing_leaves_file_alone(file_manager: TodoManager, tasks_path: Path) -> None:
    with pytest.raises(NotFound):
        file_manager.complete(99)
    assert not tasks_path.exists()


def test_round_trip_through_manager(file_manager: TodoManager, tasks_path: Path) -> None:
    file_manager.add("pipes | and \\ slashes")
    file_manager.add("second")
    file_manager.complete(2)

    reloaded = TodoManager(FileStorage(str(tasks_path)))
    assert list(reloaded) == list(file_manager)


def test_removing_newest_then_adding_in_new_run(tasks_path: Path) -> None:
    def fresh() -> TodoManager:
        return TodoManager(FileStorage(str(tasks_path)))

    fresh().add("a")
    fresh().add("b")
    fresh().remove(2)
    assert fresh().add("c") == 3
    assert [t.id for t in fresh()] == [1, 3]


def test_loaded_ids_seed_the_counter_without_header() -> None:
    storage = MemoryStorage(
        ["1|a|0|2024-01-01 09:00:00|", "2|b|0|2024-01-01 09:00:00|"]
    )
    TodoManager(storage).remove(2)
    assert storage.last_id == 2
    assert TodoManager(storage).add("c") == 3
