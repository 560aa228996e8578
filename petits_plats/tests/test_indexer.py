from petits_plats.catalog.data_store import Catalog
from petits_plats.search.indexer import IndexName, build_indexes, tokens_for

RECORDS = [
    {
        "id": 1,
        "name": "Apple pie",
        "time": 60,
        "ingredients": [{"ingredient": "Apple", "quantity": 3}, {"ingredient": "Butter"}],
        "appliance": "Oven",
        "ustensils": ["Knife", "Rolling pin"],
        "description": "Slice the apples; bake (about 40 minutes).",
    },
    {
        "id": 2,
        "name": "Banana smoothie",
        "time": 5,
        "ingredients": [{"ingredient": "Banana"}, {"ingredient": "Milk", "quantity": 25, "unit": "cl"}],
        "appliance": "Blender",
        "ustensils": ["Glass"],
        "description": "Blend the banana with the milk.",
    },
    {
        "id": 3,
        "name": "Apple crumble",
        "time": 45,
        "ingredients": [{"ingredient": "Apple"}, {"ingredient": "Butter"}, {"ingredient": "Flour"}],
        "appliance": "Oven",
        "ustensils": ["Knife"],
        "description": "Bake the apples under the crumble.",
    },
]


def _catalog() -> Catalog:
    return Catalog.from_records(RECORDS)


def test_tag_postings_follow_catalog_order():
    bundle = build_indexes(_catalog())
    assert bundle.postings(IndexName.ingredients, "apple") == (1, 3)
    assert bundle.postings(IndexName.ingredients, "milk") == (2,)
    assert bundle.postings(IndexName.appliances, "oven") == (1, 3)
    assert bundle.postings(IndexName.ustensils, "rolling pin") == (1,)


def test_vocabularies_in_first_seen_order():
    bundle = build_indexes(_catalog())
    assert bundle.vocabularies[IndexName.ingredients] == ("apple", "butter", "banana", "milk", "flour")
    assert bundle.vocabularies[IndexName.appliances] == ("oven", "blender")
    assert bundle.vocabularies[IndexName.ustensils] == ("knife", "rolling pin", "glass")
    assert bundle.vocabularies[IndexName.title_words] == ("apple", "pie", "banana", "smoothie", "crumble")


def test_description_words_skip_short_words():
    bundle = build_indexes(_catalog())
    descriptions = bundle.indexes[IndexName.description_words]
    assert "40" not in descriptions
    assert descriptions["bake"] == (1, 3)
    assert descriptions["the"] == (1, 2, 3)


def test_unknown_token_has_no_postings():
    bundle = build_indexes(_catalog())
    assert bundle.postings(IndexName.ingredients, "chocolate") == ()


def test_every_posted_id_is_in_catalog():
    catalog = _catalog()
    bundle = build_indexes(catalog)
    for index in bundle.indexes.values():
        for ids in index.values():
            assert all(recipe_id in catalog for recipe_id in ids)
            assert len(ids) == len(set(ids))


def test_build_is_deterministic():
    first = build_indexes(_catalog())
    second = build_indexes(_catalog())
    for name in IndexName:
        assert dict(first.indexes[name]) == dict(second.indexes[name])
        assert first.vocabularies[name] == second.vocabularies[name]


def test_tokens_for_recipe():
    recipe = _catalog().get(2)
    assert tokens_for(recipe, IndexName.ingredients) == ["banana", "milk"]
    assert tokens_for(recipe, IndexName.appliances) == ["blender"]
    assert tokens_for(recipe, IndexName.ustensils) == ["glass"]
    assert tokens_for(recipe, IndexName.description_words) == ["blend", "the", "banana", "with", "milk"]


def test_empty_catalog():
    bundle = build_indexes(Catalog([]))
    assert all(vocabulary == () for vocabulary in bundle.vocabularies.values())
