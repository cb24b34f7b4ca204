from __future__ import annotations

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from channelsync.services.channels.types import Entity, Page, SelectionRecord
from channelsync.services.channels.view import (
    build_compose_params,
    build_detail_params,
    build_selection_bundle,
    selection_record_for,
)
from channelsync.settings.channels import CHARACTERS, CREATORS


CREATOR = Entity.model_validate(
    {
        "id": 30,
        "fullName": "Stan Lee",
        "firstName": "Stan",
        "modified": "2019-01-01T00:00:00-0500",
        "thumbnail": {"path": "http://img/stan", "extension": "png"},
        "comics": {"items": [{"name": "Amazing Fantasy #15"}, {"name": "Fantastic Four #1"}]},
    }
)


class ViewParamsTestCase(unittest.TestCase):
    def test_creator_uses_full_name_and_no_description(self):
        entity = CREATOR.model_copy(update={"description": "ignored"})
        params = build_detail_params(entity, "creators", CREATORS)
        self.assertEqual(params.title, "Stan Lee")
        self.assertEqual(params.description, "")
        self.assertEqual(params.name, ["Amazing Fantasy #15", "Fantastic Four #1"])
        self.assertEqual(params.name_channel, "Personagens")
        self.assertEqual(params.thumbnail, "http://img/stan/landscape_xlarge.png")
        self.assertEqual(params.image, "http://img/stan/landscape_incredible.png")
        self.assertEqual(params.page_count, 0)

    def test_detail_and_compose_differ_only_in_related_label(self):
        detail = build_detail_params(CREATOR, "creators", CREATORS)
        compose = build_compose_params(CREATOR, "creators", CREATORS)
        self.assertEqual(compose.name_channel, "Histórias em Quadrinhos")
        self.assertEqual(
            detail.model_dump(exclude={"name_channel"}),
            compose.model_dump(exclude={"name_channel"}),
        )

    def test_no_related_items_leaves_label_empty(self):
        entity = Entity(id=1, name="Loner")
        params = build_detail_params(entity, "characters", CHARACTERS)
        self.assertEqual(params.name_channel, "")
        self.assertEqual(params.name, [])
        self.assertEqual(params.thumbnail, "")

    def test_builders_are_side_effect_free(self):
        entity = Entity(id=2, name="Hulk", active=True)
        before = entity.model_dump()
        build_detail_params(entity, "characters", CHARACTERS)
        build_compose_params(entity, "characters", CHARACTERS)
        self.assertEqual(entity.model_dump(), before)

    def test_selection_record_and_bundle(self):
        record = selection_record_for(CREATOR, CREATORS)
        self.assertEqual(record.id, "30")
        self.assertEqual(record.title, "Stan Lee")
        bundle = build_selection_bundle("creators", [record, SelectionRecord(id="31", title="Jack Kirby")])
        self.assertTrue(bundle.multiple)
        self.assertIsNone(bundle.id)
        self.assertEqual(bundle.name, ["Stan Lee", "Jack Kirby"])
        self.assertEqual(len(bundle.items), 2)

    def test_empty_bundle(self):
        bundle = build_selection_bundle("characters", [])
        self.assertFalse(bundle.active)
        self.assertEqual(bundle.items, [])

    def test_page_count_display_value(self):
        self.assertEqual(Page(total=145, count=20).page_count(20), 8)
        self.assertEqual(Page(total=140, count=20).page_count(20), 7)
        self.assertEqual(Page(total=0).page_count(20), 0)

    def test_page_with_active_is_copy_on_write(self):
        page = Page(total=3, count=3, results=[Entity(id=i, name=str(i)) for i in (1, 2, 3)])
        updated = page.with_active(3, True)
        self.assertEqual([e.active for e in updated.results], [False, False, True])
        self.assertFalse(page.results[2].active)


if __name__ == "__main__":
    unittest.main()
