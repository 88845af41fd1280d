import unittest
import hashlib
from rebirth.shared.utils import hasher
from rebirth.shared.utils.hasher import DIMENSIONLESS_HASH

class TestPathHashing(unittest.TestCase):
    def test_path_hash_is_md5_of_path(self):
        self.assertEqual(hasher.path_hash("/sites/demo"), hashlib.md5(b"/sites/demo").hexdigest())

    def test_parent_path(self):
        self.assertEqual(hasher.parent_path("/sites/demo/about"), "/sites/demo")
        self.assertEqual(hasher.parent_path("/sites"), "/")
        self.assertEqual(hasher.parent_path("/"), "")

    def test_join_path_at_root(self):
        self.assertEqual(hasher.join_path("/", "sites"), "/sites")
        self.assertEqual(hasher.join_path("/sites/demo", "node-1"), "/sites/demo/node-1")

    def test_descendant_path_needs_segment_boundary(self):
        self.assertTrue(hasher.is_descendant_path("/a/b/c", "/a/b"))
        self.assertTrue(hasher.is_descendant_path("/a/b", "/a/b"))
        self.assertFalse(hasher.is_descendant_path("/a/bc", "/a/b"))

    def test_site_node_path(self):
        self.assertEqual(hasher.site_node_path("/sites/demo/about/team"), "/sites/demo")
        self.assertEqual(hasher.site_node_path("/site/a"), "/site")
        self.assertIsNone(hasher.site_node_path("/sites"))
        self.assertIsNone(hasher.site_node_path("/"))


class TestDimensionHashing(unittest.TestCase):
    def test_empty_combination_is_the_dimensionless_hash(self):
        self.assertEqual(DIMENSIONLESS_HASH, "d751713988987e9331980363e24189ce")
        self.assertEqual(hasher.dimensions_hash({}), DIMENSIONLESS_HASH)

    def test_order_of_keys_and_values_does_not_matter(self):
        hash1 = hasher.dimensions_hash({"language": ["en", "de"], "country": ["us"]})
        hash2 = hasher.dimensions_hash({"country": ["us"], "language": ["de", "en"]})

        self.assertEqual(hash1, hash2)

    def test_serialization_is_compact_json_with_escaped_slashes(self):
        serialized = hasher.serialize_dimensions({"market": ["eu/west"], "language": ["en"]})

        self.assertEqual(serialized, '{"language":["en"],"market":["eu\\/west"]}')

    def test_different_values_different_hash(self):
        self.assertNotEqual(
            hasher.dimensions_hash({"language": ["en"]}),
            hasher.dimensions_hash({"language": ["de"]}),
        )

if __name__ == '__main__':
    unittest.main()
