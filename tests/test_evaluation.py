import pytest

from lish.errors import (
    LishArityError,
    LishDispatchError,
    LishError,
    LishProcessError,
    LishRuntimeError,
    LishTypeError,
)
from lish.types.function import BoundMethod, Lib, Macro, UserFunction


# -----------------------------------------------------
# Core forms
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2 3)", 6),
        ("(let [$x 2] (* $x $x))", 4),
        ("(for $i in (Array.range 0 3) (* $i $i))", [0, 1, 4]),
        ('(if (== 1 2) "a" "b")', "b"),
        ('(if (== 1 1) "a" "b")', "a"),
        ("(if false 1)", None),
        ("(let [[$x 2] [$y (+ $x 1)]] (* $x $y))", 6),
        ("(for $p in {\"a\" 1} $p)", [["a", 1]]),
        ("(for $x in [] $x)", []),
        ('(and 1 "x")', "x"),
        ("(and 1 null 2)", None),
        ("(and)", True),
        ("(or null 0 \"x\")", "x"),
        ("(or null false)", False),
        ("(or)", False),
        ('(eval "(+ 1 2)")', 3),
        ("[1 (+ 1 1) \"three\"]", [1, 2, "three"]),
        ('{"a" (+ 1 1) 2 [true]}', {"a": 2, 2: [True]}),
        ("((fn [$a $b] (- $a $b)) 5 3)", 2),
        ("42", 42),
        ("", None),
    ]
)
def test_eval(interp, source, expected):
    assert interp.eval(source) == expected


def test_untaken_branches_are_never_evaluated(interp, shell):
    assert interp.eval("(if false (launch-missiles) 1)") == 1
    assert interp.eval("(and false (launch-missiles))") is False
    assert interp.eval("(or 1 (launch-missiles))") == 1
    assert shell.calls == []


def test_special_forms_are_macros(interp):
    for name in ("def", "defn", "fn", "if", "for", "let", "delete", "and", "or", "eval"):
        assert isinstance(interp.module.lookup(name), Macro)
    assert isinstance(interp.module.lookup("+"), Lib)


def test_macros_cannot_be_applied_to_values(interp):
    with pytest.raises(LishTypeError) as exc:
        interp.eval("(Array.map [1] $if)")
    assert "Macro if cannot be applied" in str(exc.value)


# -----------------------------------------------------
# Scoping
# -----------------------------------------------------

def test_def_persists_across_evaluations(interp):
    assert interp.eval("(def $x 5)") is None
    assert interp.eval("$x") == 5
    assert interp.eval("(+ $x 1)") == 6


def test_let_bindings_do_not_leak(interp):
    assert interp.eval("(let [$y 1] $y)") == 1
    assert interp.eval("$y") is None


def test_for_binds_a_fresh_scope_per_iteration(interp):
    interp.eval("(def $fns (for $i in [1 2 3] (fn [] $i)))")
    assert interp.eval("(Array.map $fns (fn [$f] ($f)))") == [1, 2, 3]
    assert interp.eval("$i") is None


def test_def_from_nested_scope_targets_module(interp):
    interp.eval("(let [$a 1] (let [$b 2] (def $c (+ $a $b))))")
    assert interp.eval("$c") == 3
    assert "c" in interp.module.vars


def test_closures_are_lexical(interp):
    interp.eval("(def $make (fn [$n] (fn [$m] (+ $n $m))))")
    interp.eval("(def $add2 ($make 2))")
    assert interp.eval("($add2 3)") == 5
    interp.eval("(defn $show [] $hidden)")
    assert interp.eval("(let [$hidden 1] (show))") is None


def test_defn_names_the_function(interp):
    interp.eval("(defn $greet [$name] (String.concat \"hi \" $name))")
    fn = interp.module.lookup("greet")
    assert isinstance(fn, UserFunction)
    assert fn.name == "greet"
    assert interp.eval("greet bob") == "hi bob"


def test_recursion(interp):
    interp.eval("(defn $fact [$n] (if (<= $n 1) 1 (* $n (fact (- $n 1)))))")
    assert interp.eval("(fact 10)") == 3628800


def test_user_function_arity_is_exact(interp):
    interp.eval("(defn $f [$a] $a)")
    with pytest.raises(LishArityError) as exc:
        interp.eval("(f 1 2)")
    assert str(exc.value) == "f takes exactly 1 arguments: found 2 at 1:1"


def test_delete(interp):
    interp.eval("(def $x 1)")
    interp.eval("(delete $x $never-bound)")
    assert interp.eval("$x") is None
    # Library bindings live above the module scope and survive.
    interp.eval("(delete $echo)")
    assert isinstance(interp.module.lookup("echo"), Lib)


def test_delete_inside_let_removes_the_nearest_binding(interp):
    interp.eval("(def $x 1)")
    assert interp.eval("(let [$x 2] (do (delete $x) $x))") == 1
    assert interp.eval("$x") == 1


@pytest.mark.parametrize(
    "source,error,message",
    [
        ("(def x 1)", LishTypeError, "Expected variable definition after def at position 1: found value at 1:6"),
        ("(let [$x] $x)", LishArityError, "let takes exactly 2 arguments: found 1 at 1:1"),
        ("(let [] 1)", LishTypeError, "Expected non-empty array at 1:1"),
        ("(for $i of [1] $i)", LishTypeError, "Expected keyword in: found of at 1:9"),
        ("(for $i in 5 $i)", LishTypeError, "Expected iterable at 1:12"),
        ("(fn $x $x)", LishTypeError, "Expected array definition after fn at position 1: found variable at 1:5"),
        ("(if)", LishArityError, "if takes between 2 and 3 arguments: found 0 at 1:1"),
        ("(eval 1)", LishTypeError, "Expected string at 1:1"),
        ('{[1] 2}', LishTypeError, "Map key [1] is not hashable at 1:2"),
    ]
)
def test_form_errors(interp, source, error, message):
    with pytest.raises(error) as exc:
        interp.eval(source)
    assert str(exc.value) == message


# -----------------------------------------------------
# Pipes and sequences at run time
# -----------------------------------------------------

def test_pipes_pass_values(interp):
    interp.eval("(defn $sub [$a $b] (- $a $b))")
    assert interp.eval("10 | sub 3") == 7
    assert interp.eval("10 |> sub 3") == -7
    assert interp.eval("Array.range 0 10 | Array.filter (fn [$x] (== (% $x 2) 0)) | Array.take 3") == [0, 2, 4]


def test_sequences_return_the_last_value(interp):
    assert interp.eval("(def $a 1); (def $b 2); (+ $a $b)") == 3
    assert interp.eval("def $c 40\n+ $c 2") == 42


def test_member_access(interp):
    interp.eval('(def $user {"name" "ada" "tags" ["x" "y"] "address" {"city" "london"}})')
    assert interp.eval("$user.name") == "ada"
    assert interp.eval("$user.tags.1") == "y"
    assert interp.eval("$user.address.city") == "london"
    assert interp.eval("(.name $user)") == "ada"
    assert interp.eval("$user.missing.deeper") is None
    assert interp.eval('(get $user "tags" 5)') is None
    interp.eval('(.address.city $user "paris")')
    assert interp.eval("$user.address.city") == "paris"


def test_interop_functions(interp):
    interp.define("py_add", lambda a, b: a + b)
    assert interp.eval("(py_add 1 2)") == 3
    assert interp.eval("(Array.map [1 2] (fn [$x] (py_add $x 10)))") == [11, 12]


def test_functions_pulled_from_maps_are_bound(interp):
    def greet(receiver, name):
        return f"{receiver['greeting']} {name}"

    interp.define("obj", {"greeting": "hello", "greet": greet})
    assert isinstance(interp.eval("$obj.greet"), BoundMethod)
    assert interp.eval('($obj.greet "x")') == "hello x"


def test_host_errors_carry_the_call_location(interp):
    with pytest.raises(LishRuntimeError) as exc:
        interp.eval("(+ 1\n  (/ 1 0))")
    assert str(exc.value) == "division by zero at 2:3"


def test_arithmetic_overflow_is_a_runtime_error(interp):
    with pytest.raises(LishRuntimeError) as exc:
        interp.eval("(^ 2.0 10000)")
    assert str(exc.value).endswith("at 1:1")
    assert isinstance(exc.value.__cause__, OverflowError)


def test_unbounded_recursion_is_a_runtime_error(interp):
    interp.eval("(defn $f [$x] (f $x))")
    with pytest.raises(LishRuntimeError) as exc:
        interp.eval("(f 1)")
    assert str(exc.value) == "maximum recursion depth exceeded at 1:1"
    assert interp.eval("(+ 1 1)") == 2


# -----------------------------------------------------
# Dual dispatch
# -----------------------------------------------------

def test_bound_callable_never_spawns(interp, shell):
    calls = []
    interp.define("greet", lambda name: calls.append(name) or f"hi {name}")
    assert interp.eval('(greet "x")') == "hi x"
    assert calls == ["x"]
    assert shell.calls == []


def test_unbound_head_spawns_a_process(interp, shell, context):
    interp.eval('(echo-name "x")')
    assert shell.calls == [("echo-name", ["x"], context.cwd)]


def test_command_output_is_the_value(interp, shell):
    shell.outputs["whoami"] = "root\n"
    assert interp.eval("whoami") == "root\n"
    assert interp.eval("(String.trim (whoami))") == "root"


def test_external_arguments_are_stringified_and_spread(interp, shell):
    interp.eval('(tool 1 true null [a "b"] 2.5 -v)')
    assert shell.calls[0][1] == ["1", "true", "null", "a", "b", "2.5", "-v"]


def test_number_arguments_keep_their_spelling(interp, shell):
    interp.eval("git checkout 1.10 007 1e3")
    assert shell.calls[0][:2] == ("git", ["checkout", "1.10", "007", "1e3"])
    assert interp.eval("(+ 007 1)") == 8


def test_lazy_sequences_spread_into_arguments(interp, shell):
    interp.eval("(tool (Array.range 1 4))")
    assert shell.calls[0][1] == ["1", "2", "3"]


def test_quoted_heads_always_run_as_programs(interp, shell):
    interp.eval("(defn $greet [$n] $n)")
    interp.eval('("greet" 1)')
    assert shell.calls[0][:2] == ("greet", ["1"])


def test_string_values_in_head_position_run_as_programs(interp, shell):
    interp.eval('(def $editor "vim")')
    interp.eval("($editor notes.txt)")
    assert shell.calls[0][:2] == ("vim", ["notes.txt"])


def test_pipeline_into_external_command(interp, shell):
    shell.outputs["ls"] = "a\nb\n"
    interp.eval("ls | grep a")
    assert [c[:2] for c in shell.calls] == [("ls", []), ("grep", ["a\nb\n", "a"])]


def test_sequence_feeds_its_last_value_into_a_pipe(interp, shell):
    shell.outputs["b"] = "bee"
    interp.eval("a ; b | wc")
    assert [c[:2] for c in shell.calls] == [("a", []), ("b", []), ("wc", ["bee"])]


def test_failed_command_is_a_process_error(interp, shell):
    shell.failures["false-cmd"] = 1
    with pytest.raises(LishProcessError) as exc:
        interp.eval("(false-cmd)")
    assert str(exc.value) == "false-cmd exited with status 1 at 1:1"


def test_non_callable_head_is_a_dispatch_error(interp):
    with pytest.raises(LishDispatchError) as exc:
        interp.eval("(1 2)")
    assert str(exc.value) == "call target is neither a function nor a command at 1:1"


def test_errors_abort_only_the_current_evaluation(interp):
    interp.eval("(def $x 1)")
    with pytest.raises(LishError):
        interp.eval("(def $y (/ 1 0))")
    assert interp.eval("$x") == 1
    assert interp.eval("$y") is None
