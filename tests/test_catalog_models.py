from __future__ import annotations

import pytest

from filmbrowser.catalog.models import (
    Film,
    LoadResult,
    MalformedCatalogError,
    CatalogUnavailableError,
)

A_NEW_HOPE = {
    "title": "A New Hope",
    "episode_id": 4,
    "release_date": "1977-05-25",
    "director": "George Lucas",
    "producer": "Gary Kurtz, Rick McCallum",
    "opening_crawl": "It is a period of civil war...",
    "url": "https://swapi.dev/api/films/1/",
    "characters": ["https://swapi.dev/api/people/1/"],
}


def test_from_payload_copies_fields_and_keeps_extras() -> None:
    film = Film.from_payload(A_NEW_HOPE, cover_path="images/episode4.jpeg")

    assert film.title == "A New Hope"
    assert film.episode_id == 4
    assert film.release_date == "1977-05-25"
    assert film.director == "George Lucas"
    assert film.producer == "Gary Kurtz, Rick McCallum"
    assert film.opening_crawl == "It is a period of civil war..."
    assert film.cover_path == "images/episode4.jpeg"
    assert film.extra["url"] == "https://swapi.dev/api/films/1/"
    assert film.episode_label == "Episode 4"


def test_film_is_immutable() -> None:
    film = Film.from_payload(A_NEW_HOPE)

    with pytest.raises(AttributeError):
        film.title = "Other"  # type: ignore[misc]
    with pytest.raises(TypeError):
        film.extra["url"] = "changed"  # type: ignore[index]


def test_cover_path_defaults_to_empty() -> None:
    assert Film.from_payload(A_NEW_HOPE).cover_path == ""


@pytest.mark.parametrize("missing", ["title", "episode_id", "opening_crawl"])
def test_missing_field_is_malformed(missing: str) -> None:
    payload = {key: value for key, value in A_NEW_HOPE.items() if key != missing}

    with pytest.raises(MalformedCatalogError, match=missing):
        Film.from_payload(payload)


@pytest.mark.parametrize("episode_id", ["4", 4.0, None, True])
def test_episode_id_must_be_integer(episode_id) -> None:
    with pytest.raises(MalformedCatalogError):
        Film.from_payload({**A_NEW_HOPE, "episode_id": episode_id})


@pytest.mark.parametrize("name", ["title", "director", "producer", "opening_crawl"])
@pytest.mark.parametrize("value", [None, 42])
def test_text_field_must_be_a_string(name: str, value) -> None:
    with pytest.raises(MalformedCatalogError, match=name):
        Film.from_payload({**A_NEW_HOPE, name: value})


def test_null_release_date_maps_to_empty() -> None:
    film = Film.from_payload({**A_NEW_HOPE, "release_date": None})

    assert film.release_date == ""


def test_non_string_release_date_is_malformed() -> None:
    with pytest.raises(MalformedCatalogError, match="release_date"):
        Film.from_payload({**A_NEW_HOPE, "release_date": 1977})


def test_non_object_entry_is_malformed() -> None:
    with pytest.raises(MalformedCatalogError):
        Film.from_payload(["A New Hope", 4])  # type: ignore[arg-type]


def test_load_result_ok_keeps_order() -> None:
    first = Film.from_payload({**A_NEW_HOPE, "episode_id": 5, "title": "The Empire Strikes Back"})
    second = Film.from_payload(A_NEW_HOPE)

    result = LoadResult.ok([first, second])

    assert result.succeeded
    assert result.films == (first, second)
    assert result.error is None


def test_load_result_rejects_duplicate_episodes() -> None:
    film = Film.from_payload(A_NEW_HOPE)

    with pytest.raises(MalformedCatalogError, match="Duplicate episode_id 4"):
        LoadResult.ok([film, film])


def test_load_result_failed() -> None:
    error = CatalogUnavailableError("offline")
    result = LoadResult.failed(error)

    assert not result.succeeded
    assert result.films == ()
    assert result.error is error
    assert error.message == "offline"
