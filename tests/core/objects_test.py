import unittest

from monkey.core.environment import Environment
from monkey.core.objects import (
    FALSE,
    NULL,
    TRUE,
    Array,
    Boolean,
    Builtin,
    Error,
    Function,
    Hash,
    HashKey,
    HashPair,
    Integer,
    ObjectType,
    ReturnValue,
    String,
    fnv1a_64,
    is_error,
    is_truthy,
    native_bool_to_boolean,
    wrap_int,
)
from monkey.core.parser import parse


class ObjectsTestCase(unittest.TestCase):

    def test_string_hash_key(self):
        hello1 = String("Hello World")
        hello2 = String("Hello World")
        diff1 = String("My name is johnny")
        diff2 = String("My name is johnny")

        self.assertEqual(hello1.hash_key(), hello2.hash_key())
        self.assertEqual(diff1.hash_key(), diff2.hash_key())
        self.assertNotEqual(hello1.hash_key(), diff1.hash_key())

    def test_hash_key_types(self):
        self.assertEqual(HashKey(ObjectType.INTEGER, 1), Integer(1).hash_key())
        self.assertEqual(HashKey(ObjectType.BOOLEAN, 1), TRUE.hash_key())
        self.assertEqual(HashKey(ObjectType.BOOLEAN, 0), FALSE.hash_key())
        self.assertEqual(HashKey(ObjectType.INTEGER, 2 ** 64 - 1), Integer(-1).hash_key())

        # same value, different type
        self.assertNotEqual(Integer(1).hash_key(), TRUE.hash_key())
        self.assertNotEqual(Integer(0).hash_key(), String("").hash_key())

    def test_fnv1a_64(self):
        cases = {
            b"": 0xCBF29CE484222325,
            b"a": 0xAF63DC4C8601EC8C,
            b"foobar": 0x85944171F73967E8,
        }
        for data, expected in cases.items():
            self.assertEqual(expected, fnv1a_64(data), data)
        self.assertEqual(HashKey(ObjectType.STRING, 0xAF63DC4C8601EC8C), String("a").hash_key())

    def test_wrap_int(self):
        cases = {
            0: 0,
            -1: -1,
            2 ** 63 - 1: 2 ** 63 - 1,
            2 ** 63: -2 ** 63,
            -2 ** 63 - 1: 2 ** 63 - 1,
            2 ** 64 + 5: 5,
        }
        for value, expected in cases.items():
            self.assertEqual(expected, wrap_int(value), value)

    def test_inspect(self):
        env = Environment()
        program, __ = parse("fn(x, y) { x + y; }")
        literal = program.statements[0].expression
        pairs = {
            String("a").hash_key(): HashPair(String("a"), Integer(1)),
            TRUE.hash_key(): HashPair(TRUE, Array([NULL])),
        }

        cases = [
            (Integer(-42), "-42"),
            (TRUE, "true"),
            (FALSE, "false"),
            (NULL, "null"),
            (String("hello world"), "hello world"),
            (Array([Integer(1), String("two"), Array()]), "[1, two, []]"),
            (Array(), "[]"),
            (Hash(pairs), "{a: 1, true: [null]}"),
            (Hash(), "{}"),
            (Function(literal.parameters, literal.body, env), "fn(x, y) {\n(x + y)\n}"),
            (Builtin(lambda *args: NULL, "noop"), "builtin function"),
            (ReturnValue(Integer(5)), "5"),
            (Error("identifier not found: x"), "ERROR: identifier not found: x"),
        ]
        for obj, expected in cases:
            self.assertEqual(expected, obj.inspect(), repr(obj))
            self.assertEqual(expected, str(obj))

    def test_types(self):
        self.assertIs(ObjectType.INTEGER, Integer(1).type)
        self.assertIs(ObjectType.NULL, NULL.type)
        self.assertIs(ObjectType.ERROR, Error("x").type)
        self.assertEqual("RETURN_VALUE", str(ReturnValue(NULL).type))

    def test_singletons(self):
        self.assertIs(TRUE, native_bool_to_boolean(True))
        self.assertIs(FALSE, native_bool_to_boolean(False))
        self.assertIsNot(TRUE, Boolean(True))  # only the singletons compare by identity

    def test_is_truthy(self):
        should_be_truthy = [TRUE, Integer(0), Integer(-1), String(""), Array(), Hash()]
        for obj in should_be_truthy:
            self.assertTrue(is_truthy(obj), repr(obj))

        should_be_falsy = [FALSE, NULL]
        for obj in should_be_falsy:
            self.assertFalse(is_truthy(obj), repr(obj))

    def test_is_error(self):
        self.assertTrue(is_error(Error("boom")))
        self.assertFalse(is_error(NULL))
        self.assertFalse(is_error(None))


class EnvironmentTestCase(unittest.TestCase):

    def test_get_set(self):
        env = Environment()
        self.assertEqual((None, False), env.get("x"))

        self.assertEqual(Integer(1), env.set("x", Integer(1)))
        self.assertEqual((Integer(1), True), env.get("x"))
        self.assertIn("x", env)

        env.set("x", String("rebound"))
        self.assertEqual(String("rebound"), env.get("x")[0])

    def test_enclosed(self):
        outer = Environment()
        outer.set("x", Integer(1))
        outer.set("y", Integer(2))

        inner = Environment.enclosed(outer)
        inner.set("x", Integer(10))  # shadows outer x
        self.assertEqual(Integer(10), inner.get("x")[0])
        self.assertEqual(Integer(2), inner.get("y")[0])
        self.assertEqual(Integer(1), outer.get("x")[0])
        self.assertNotIn("z", inner)

        # parent bindings made later are visible to the child
        outer.set("z", Integer(3))
        self.assertEqual((Integer(3), True), inner.get("z"))

        # child bindings never leak into the parent
        inner.set("w", Integer(4))
        self.assertEqual((None, False), outer.get("w"))

    def test_deep_chain(self):
        env = Environment()
        env.set("root", TRUE)
        for __ in range(5000):
            env = Environment.enclosed(env)
        self.assertIs(TRUE, env.get("root")[0])


if __name__ == '__main__':
    unittest.main()
