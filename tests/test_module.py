"""
Tests for Module: method tables, inclusion, linearization and lookup.
"""

import pytest

from mixology import Module, Kernel, MethodMissing, DuplicateDefinitionErr


def test_define_and_methods():
  m = Module("Greeting")
  m.define("greet", lambda self: "hi")

  assert "greet" in m.methods()
  assert m.methods().owner() is m
  assert m.instance_methods(False) == ["greet"]
  assert m.name() == "Greeting"
  assert m.to_str() == "Greeting"


def test_redefine_overwrites_silently():
  m = Module({"greet": lambda self: "hi"})
  replacement = lambda self: "hello"
  m.define("greet", replacement)

  assert m.instance_method("greet") is replacement


def test_strict_define_rejects_duplicates():
  m = Module("Strict", {"run": lambda self: 1})

  with pytest.raises(DuplicateDefinitionErr) as exc:
    m.define("run", lambda self: 2, redefine=False)

  assert "run" in str(exc.value)
  assert "Strict" in str(exc.value)


def test_transitive_includes_and_post_order():
  c = Module("C")
  b = Module("B").include(c)
  a = Module("A").include(b)

  assert a.includes(c)
  assert a.includes(a)
  assert not c.includes(a)
  assert a.ancestors() == [c, b, a]


def test_diamond_linearization_keeps_first_occurrence():
  d = Module("D")
  b = Module("B").include(d)
  c = Module("C").include(d)
  a = Module("A").include(b).include(c)

  assert a.ancestors() == [d, b, c, a]


def test_including_twice_does_not_duplicate_ancestry():
  m = Module("M")
  a = Module("A").include(m).include(m)

  assert a.ancestors() == [m, a]
  assert a.dependents() == []
  assert m.dependents() == [a]


def test_indirect_self_inclusion_is_deduplicated():
  a = Module("A")
  b = Module("B")
  a.include(b)
  b.include(a)

  assert a.ancestors() == [b, a]
  assert b.ancestors() == [a, b]
  assert a.includes(b) and b.includes(a)


def test_self_inclusion_terminates():
  a = Module("A", {"go": lambda self: 1})
  a.include(a)

  assert a.ancestors() == [a]
  assert a.lookup("go") == [a.instance_method("go")]


def test_lookup_returns_defining_modules_in_ancestry_order():
  base = lambda self: "base"
  mid = lambda self: "mid"
  top = lambda self: "top"
  b = Module("B", {"greet": base})
  m = Module("M", {"other": lambda self: None}).include(b)
  c = Module("C", {"greet": mid}).include(m)
  a = Module("A", {"greet": top}).include(c)

  assert a.lookup("greet") == [base, mid, top]
  assert a.lookup("missing") == []
  assert a.instance_method("greet") is top


def test_lookup_sees_later_definitions():
  b = Module("B")
  a = Module("A").include(b)
  assert a.lookup("greet") == []

  fn = lambda self: "late"
  b.define("greet", fn)

  assert a.lookup("greet") == [fn]


def test_later_inclusion_shadows_earlier():
  first = Module({"greet": lambda self: "first"})
  second = Module({"greet": lambda self: "second"})
  a = Module("A").include(first).include(second)

  assert a.instance_method("greet")(None) == "second"


def test_instance_methods_with_and_without_inherited():
  b = Module({"one": lambda self: 1, "shared": lambda self: 1})
  a = Module({"two": lambda self: 2, "shared": lambda self: 2, "const": 42}).include(b)

  assert sorted(a.instance_methods(False)) == ["shared", "two"]
  assert sorted(a.instance_methods()) == ["one", "shared", "two"]


def test_kernel_is_reachable_but_gate_is_not_an_ancestor():
  assert Kernel.includes(MethodMissing)
  assert MethodMissing not in Kernel.ancestors()
  assert Kernel.ancestors() == [Kernel]


def test_include_record_with_nested_include():
  helper = Module("Helper", {"help": lambda self: "help"})
  m = Module("M")
  m.include({"include": helper, "run": lambda self: "run"})

  assert m.includes(helper)
  assert sorted(m.instance_methods()) == ["help", "run"]


def test_include_plain_class_flattens_methods():
  class Record:
    def speak(self):
      return "speak"

    @staticmethod
    def ignored():
      return None

  m = Module(Record)

  assert m.instance_methods(False) == ["speak"]
  assert m.included_modules() == []


def test_included_hook_receives_base():
  seen = []
  m = Module("Hooked")
  m.extend({"included": lambda self, base: seen.append(base)})
  a = Module("A").include(m)

  assert seen == [a]


def test_method_added_observers():
  seen = []

  def observer(name, owner):
    seen.append((name, owner))

  Module.method_added(observer)
  try:
    m = Module("Observed")
    m.define("ping", lambda self: None)
    m.define("constant", 3)
  finally:
    Module.remove_method_added(observer)

  assert seen == [("ping", m)]


def test_record_notifications_name_the_includer():
  seen = []

  def observer(name, owner):
    seen.append((name, owner))

  Module.method_added(observer)
  try:
    m = Module("Target")
    m.include({"pong": lambda self: None})
  finally:
    Module.remove_method_added(observer)

  assert seen == [("pong", m)]


def test_include_none_returns_self():
  m = Module("M")
  assert m.include(None) is m


def test_kernel_keeps_its_extend_method():
  assert "extend" in Kernel.methods()
  assert "is_a" in Kernel.methods()


def test_callable_include_and_extend_keys_are_methods():
  def extend(self, source):
    return ("extend", source)

  def include(self, source):
    return ("include", source)

  m = Module("Callables", {"extend": extend, "include": include})

  assert m.methods().get("extend") is extend
  assert m.methods().get("include") is include
  assert m.included_modules() == []


def test_structural_extend_key_still_extends():
  hooks = Module("Hooks", {"describe": lambda self: "described"})
  m = Module("Structured", {"extend": hooks, "plain": lambda self: None})

  assert "extend" not in m.methods()
  assert m.is_a(hooks)
  assert m.describe() == "described"
