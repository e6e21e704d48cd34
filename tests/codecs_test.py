from unittest import TestCase

from codecschema import codecs as t
from codecschema.codecs import Tag, is_valid, label


class CodecsTest(TestCase):

    def test_primitives(self):
        self.assertTrue(t.string.is_("x"))
        self.assertFalse(t.string.is_(1))
        self.assertTrue(t.number.is_(1.5))
        self.assertTrue(t.number.is_(2))
        self.assertFalse(t.number.is_(True))
        self.assertTrue(t.integer.is_(2))
        self.assertFalse(t.integer.is_(2.5))
        self.assertTrue(t.boolean.is_(False))
        self.assertFalse(t.boolean.is_(0))
        self.assertTrue(t.null.is_(None))
        self.assertFalse(t.null.is_(0))
        self.assertTrue(t.unknown.is_(object()))
        self.assertFalse(t.never.is_(None))

    def test_literal_keeps_bool_apart(self):
        self.assertTrue(t.literal(1).is_(1))
        self.assertFalse(t.literal(1).is_(True))
        self.assertFalse(t.literal(True).is_(1))
        self.assertTrue(t.literal("foo").is_("foo"))

    def test_arrays_and_tuples(self):
        self.assertTrue(t.array(t.number).is_([1, 2]))
        self.assertFalse(t.array(t.number).is_([1, "2"]))
        self.assertFalse(t.array(t.number).is_({}))
        pair = t.tuple_([t.string, t.number])
        self.assertTrue(pair.is_(["a", 1]))
        self.assertFalse(pair.is_(["a", 1, 2]))
        self.assertFalse(pair.is_([1, "a"]))

    def test_objects(self):
        props = {"a": t.string, "b": t.number}
        self.assertTrue(t.interface(props).is_({"a": "x", "b": 1, "c": None}))
        self.assertFalse(t.interface(props).is_({"a": "x"}))
        self.assertTrue(t.partial(props).is_({"a": "x"}))
        self.assertFalse(t.partial(props).is_({"a": 1}))
        self.assertFalse(t.strict(props).is_({"a": "x", "b": 1, "c": None}))
        self.assertTrue(t.exact(t.interface(props)).is_({"a": "x", "b": 1}))
        self.assertFalse(t.exact(t.partial(props)).is_({"c": 1}))

    def test_dictionary(self):
        codec = t.dictionary(t.keyof(["x", "y"]), t.number)
        self.assertTrue(codec.is_({"x": 1}))
        self.assertFalse(codec.is_({"z": 1}))
        self.assertFalse(codec.is_({"x": "1"}))

    def test_algebraic(self):
        self.assertTrue(t.union([t.string, t.null]).is_(None))
        self.assertFalse(t.union([t.string, t.null]).is_(1))
        both = t.intersection([t.interface({"a": t.string}), t.interface({"b": t.number})])
        self.assertTrue(both.is_({"a": "x", "b": 1}))
        self.assertFalse(both.is_({"a": "x"}))

    def test_wrappers(self):
        self.assertTrue(t.readonly(t.string).is_("x"))
        positive = t.refinement(t.number, lambda n: n > 0, name="Positive")
        self.assertTrue(positive.is_(3))
        self.assertFalse(positive.is_(-3))
        self.assertFalse(positive.is_("3"))

    def test_recursive_body_is_lazy(self):
        calls = []

        def body():
            calls.append(1)
            return t.array(foo)

        foo = t.recursion("Foo", body)
        self.assertEqual(calls, [])
        self.assertIs(foo.resolve().type, foo)
        self.assertEqual(len(calls), 1)

    def test_primitive_rejects_structured_tag(self):
        with self.assertRaises(ValueError):
            t.Primitive(Tag.ARRAY)

    def test_label(self):
        self.assertEqual(label(t.string), "string")
        self.assertEqual(label(t.interface({}, name="Thing")), "Thing")
        self.assertEqual(label(t.recursion("Foo", lambda: t.null)), "Foo")
        self.assertEqual(label(object()), "object")

    def test_not_a_codec(self):
        self.assertFalse(is_valid(object(), 1))
