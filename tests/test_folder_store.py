import pytest

from flashdeck.exceptions import StorageError, ValidationError
from flashdeck.services import CardStore, FolderStore


def test_create_folder(folder_store, repository):
    folder = folder_store.create("  Animals ")

    assert folder.name == "Animals"
    assert folder.id.isdigit()
    assert folder.created_at == int(folder.id)
    assert folder_store.list_all() == [folder]
    assert repository.load_json("folders") == [
        {"id": folder.id, "name": "Animals", "createdAt": folder.created_at}
    ]


@pytest.mark.parametrize("name", ["", "   ", "\n"])
def test_create_blank_name_raises(folder_store, name):
    with pytest.raises(ValidationError):
        folder_store.create(name)
    assert folder_store.list_all() == []


def test_create_name_length_limit(folder_store):
    assert folder_store.create("x" * 21).name == "x" * 21
    with pytest.raises(ValidationError):
        folder_store.create("x" * 22)
    assert len(folder_store.list_all()) == 1


def test_create_ids_are_unique(folder_store):
    ids = [folder_store.create(f"Folder {i}").id for i in range(20)]
    assert len(set(ids)) == 20


def test_get_and_ids(folder_store):
    a = folder_store.create("A")
    b = folder_store.create("B")
    assert folder_store.get(a.id) == a
    assert folder_store.get("nope") is None
    assert folder_store.ids() == {a.id, b.id}


def test_rename(folder_store):
    folder = folder_store.create("Animals")
    renamed = folder_store.rename(folder.id, "  Pets ")
    assert renamed == folder_store.get(folder.id)
    assert renamed.name == "Pets"


def test_rename_blank_is_cancel(folder_store):
    folder = folder_store.create("Animals")
    assert folder_store.rename(folder.id, "   ") is None
    assert folder_store.get(folder.id).name == "Animals"


def test_rename_too_long_raises(folder_store):
    folder = folder_store.create("Animals")
    with pytest.raises(ValidationError):
        folder_store.rename(folder.id, "y" * 22)
    assert folder_store.get(folder.id).name == "Animals"


def test_rename_unknown_folder_is_noop(folder_store):
    folder_store.create("Animals")
    assert folder_store.rename("missing", "Pets") is None
    assert [f.name for f in folder_store.list_all()] == ["Animals"]


def test_delete_cascade_moves_cards_to_unfiled(folder_store, card_store):
    """Test the folder disappears and its cards become unfiled."""
    animals = folder_store.create("Animals")
    colors = folder_store.create("Colors")
    cat = card_store.create("Cat", "Kedi", folder_id=animals.id)
    dog = card_store.create("Dog", "Köpek", folder_id=animals.id)
    red = card_store.create("Red", "Kırmızı", folder_id=colors.id)

    folder_store.delete_cascade(animals.id)

    assert animals.id not in folder_store.ids()
    assert card_store.get(cat.id).folder_id is None
    assert card_store.get(dog.id).folder_id is None
    assert card_store.get(red.id).folder_id == colors.id
    assert {card.id for card in card_store.filter_by_folder(None)} == {cat.id, dog.id}


def test_delete_cascade_unknown_folder_is_harmless(folder_store, card_store):
    folder = folder_store.create("Animals")
    card = card_store.create("Cat", "Kedi", folder_id=folder.id)

    folder_store.delete_cascade("missing")

    assert folder_store.ids() == {folder.id}
    assert card_store.get(card.id).folder_id == folder.id


def test_delete_cascade_card_write_failure_keeps_folder_removal(flaky_repository):
    """Test a failed second step propagates and is repaired by a re-run."""
    cards = CardStore(flaky_repository)
    folders = FolderStore(flaky_repository, cards)
    folder = folders.create("Animals")
    card = cards.create("Cat", "Kedi", folder_id=folder.id)

    flaky_repository.failing_keys.add("flashcards")
    with pytest.raises(StorageError):
        folders.delete_cascade(folder.id)

    # Step 1 is not rolled back; the card still points at the deleted folder
    assert folders.list_all() == []
    assert cards.get(card.id).folder_id == folder.id

    flaky_repository.failing_keys.clear()
    folders.delete_cascade(folder.id)
    assert cards.get(card.id).folder_id is None


def test_delete_cascade_folder_write_failure_changes_nothing(flaky_repository):
    cards = CardStore(flaky_repository)
    folders = FolderStore(flaky_repository, cards)
    folder = folders.create("Animals")
    card = cards.create("Cat", "Kedi", folder_id=folder.id)

    flaky_repository.failing_keys.add("folders")
    with pytest.raises(StorageError):
        folders.delete_cascade(folder.id)

    assert folders.ids() == {folder.id}
    assert cards.get(card.id).folder_id == folder.id


@pytest.mark.parametrize("blob", [
    '{"id": "1", "name": "Animals"}',
    '["Animals"]',
    '[{"name": "Animals"}]',
    '[{"id": "1", "name": "Animals", "createdAt": "yesterday"}]',
])
def test_malformed_collection_raises_storage_error(folder_store, repository, blob):
    repository.set("folders", blob)

    with pytest.raises(StorageError):
        folder_store.list_all()
    with pytest.raises(StorageError):
        folder_store.create("Colors")
    assert repository.get("folders") == blob
