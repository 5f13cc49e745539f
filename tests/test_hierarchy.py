import sys
import os
import unittest

current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '..'))

# Add the project root to the system path
sys.path.insert(0, project_root)

from factories import hierarchy as hierarchy_factory
from factories.hierarchy import create_hierarchy


class TestCreateHierarchy(unittest.TestCase):

    def setUp(self):
        hierarchy_factory.seed(1234)

    def test_place_and_person_counts(self):
        hierarchy = create_hierarchy(name='test', nbr_clinics=2, nbr_persons=3)

        types = [place['type'] for place in hierarchy.places]
        self.assertEqual(types.count('district_hospital'), 1)
        self.assertEqual(types.count('health_center'), 1)
        self.assertEqual(types.count('clinic'), 2)
        # each clinic holds its persons plus a primary contact
        self.assertEqual(len(hierarchy.persons), 2 * (3 + 1))
        self.assertIsNone(hierarchy.user)

    def test_lineage_links_to_parents(self):
        hierarchy = create_hierarchy(name='test', nbr_clinics=1, nbr_persons=1)
        district_hospital = hierarchy.places[0]
        health_center = hierarchy.health_center
        clinic = hierarchy.clinics[0]

        self.assertNotIn('parent', district_hospital)
        self.assertEqual(health_center['parent'], {'_id': district_hospital['_id']})
        self.assertEqual(clinic['parent'], {'_id': health_center['_id'], 'parent': {'_id': district_hospital['_id']}})
        for person in hierarchy.persons:
            self.assertEqual(person['parent']['_id'], clinic['_id'])
            self.assertEqual(person['parent']['parent']['parent']['_id'], district_hospital['_id'])

    def test_clinic_contact_is_one_of_its_persons(self):
        hierarchy = create_hierarchy(name='test', nbr_clinics=1, nbr_persons=2)
        contact_id = hierarchy.clinics[0]['contact']['_id']

        self.assertIn(contact_id, [person['_id'] for person in hierarchy.persons])

    def test_ids_are_unique(self):
        hierarchy = create_hierarchy(name='test', nbr_clinics=3, nbr_persons=2)
        ids = [doc['_id'] for doc in hierarchy.docs]

        self.assertEqual(len(ids), len(set(ids)))

    def test_user_is_attached_to_health_center(self):
        hierarchy = create_hierarchy(name='test', user=True, nbr_clinics=1, nbr_persons=1)
        user = hierarchy.user

        self.assertEqual(user['username'], 'test_user')
        self.assertEqual(user['place'], hierarchy.health_center['_id'])
        self.assertEqual(user['roles'], ['chw'])
        self.assertTrue(user['password'])
        self.assertTrue(user['contact']['name'])


if __name__ == '__main__':
    unittest.main()
