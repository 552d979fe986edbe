"""Built-in functions of the Monkey language. Each builtin checks its own arity and argument types and reports
failures as Error objects:

```
argument to `<name>` not supported, got=<TYPE>
wrong number of arguments for <name>. got=<n>, want=<m>
```

None of the array builtins mutate their argument: `rest` and `push` return new arrays.
"""

from monkey.core.objects import NULL, Array, Builtin, Error, Integer, String


def wrong_arity(name, args, want):
    """Returns an Error if len(args) != want, otherwise None."""
    if len(args) != want:
        return Error(f"wrong number of arguments for {name}. got={len(args)}, want={want}")
    return None


def unsupported(name, arg):
    return Error(f"argument to `{name}` not supported, got={arg.type}")


def builtin_len(*args):
    error = wrong_arity("len", args, 1)
    if error:
        return error

    arg, = args
    if isinstance(arg, String):
        return Integer(len(arg.value))
    elif isinstance(arg, Array):
        return Integer(len(arg.elements))
    return unsupported("len", arg)


def builtin_first(*args):
    error = wrong_arity("first", args, 1)
    if error:
        return error

    arg, = args
    if not isinstance(arg, Array):
        return unsupported("first", arg)
    return arg.elements[0] if arg.elements else NULL


def builtin_last(*args):
    error = wrong_arity("last", args, 1)
    if error:
        return error

    arg, = args
    if not isinstance(arg, Array):
        return unsupported("last", arg)
    return arg.elements[-1] if arg.elements else NULL


def builtin_rest(*args):
    error = wrong_arity("rest", args, 1)
    if error:
        return error

    arg, = args
    if not isinstance(arg, Array):
        return unsupported("rest", arg)
    return Array(arg.elements[1:])


def builtin_push(*args):
    error = wrong_arity("push", args, 2)
    if error:
        return error

    arr, element = args
    if not isinstance(arr, Array):
        return unsupported("push", arr)
    return Array(arr.elements + [element])


def builtin_puts(*args):
    """Prints the display form of each argument on its own line to the current standard output."""
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS = {
    "len": Builtin(builtin_len, "len"),
    "first": Builtin(builtin_first, "first"),
    "last": Builtin(builtin_last, "last"),
    "rest": Builtin(builtin_rest, "rest"),
    "push": Builtin(builtin_push, "push"),
    "puts": Builtin(builtin_puts, "puts"),
}
