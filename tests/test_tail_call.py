import sys

import pytest

from nslisp.errors import NsSyntaxError


SUM_LOOP = """
(loop (i accu) (1 0)
  (if (native.i64.gt_s i {n})
      (break accu)
      (recur (native.i64.add i 1) (native.i64.add accu i))))
"""

SUM_DEFNR = """
(defnr sum (i accu)
  (if (native.i64.gt_s i {n})
      (break accu)
      (recur (native.i64.add i 1) (native.i64.add accu i))))
"""


def _stack_depth() -> int:
    frame, depth = sys._getframe(), 0
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def test_loop_sum(itp):
    assert itp.eval_from_string(SUM_LOOP.format(n=100)) == 5050


def test_defnr_sum(itp):
    itp.eval_from_string(SUM_DEFNR.format(n=100))
    assert itp.eval_from_string("(sum 1 0)") == 5050


@pytest.mark.parametrize("n", range(0, 15))
def test_defnr_matches_defn(itp, n):
    itp.eval_from_string_multi_exps(
        """
        (defn fib (n)
          (if (native.i64.lt_s n 2)
              n
              (native.i64.add (fib (native.i64.sub n 1))
                              (fib (native.i64.sub n 2)))))
        (defnr fibr (n a b)
          (if (native.i64.eq n 0)
              (break a)
              (recur (native.i64.sub n 1) b (native.i64.add a b))))
        """
    )
    assert itp.eval_from_string(f"(fib {n})") == itp.eval_from_string(f"(fibr {n} 0 1)")


def test_loop_and_defnr_run_in_bounded_stack(itp):
    """Many iterations under a recursion limit only slightly above the current depth."""
    n = 20_000
    itp.eval_from_string(SUM_DEFNR.format(n=n))
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(_stack_depth() + 250)
    try:
        assert itp.eval_from_string(SUM_LOOP.format(n=n)) == n * (n + 1) // 2
        assert itp.eval_from_string("(sum 1 0)") == n * (n + 1) // 2
    finally:
        sys.setrecursionlimit(limit)


def test_each_iteration_has_fresh_scope(itp):
    source = """
    (loop (i) (0)
      (do (let j (native.i64.add i 1))
          (if (native.i64.ge_s j 5) (break j) (recur j))))
    """
    assert itp.eval_from_string(source) == 5


def test_set_loop_variable(itp):
    assert itp.eval_from_string("(loop (i) (0) (do (set i 10) (break i)))") == 10


def test_loop_reads_enclosing_scope(itp):
    source = """
    (do (let step 3)
        (loop (i) (0)
          (if (native.i64.ge_s i 9) (break i) (recur (native.i64.add i step)))))
    """
    assert itp.eval_from_string(source) == 9


def test_nested_loops(itp):
    source = """
    (loop (i total) (0 0)
      (if (native.i64.ge_s i 3)
          (break total)
          (recur (native.i64.add i 1)
                 (native.i64.add total
                   (loop (j acc) (0 0)
                     (if (native.i64.ge_s j 4)
                         (break acc)
                         (recur (native.i64.add j 1) (native.i64.add acc 1))))))))
    """
    assert itp.eval_from_string(source) == 12


def test_loop_without_parameters(itp):
    assert itp.eval_from_string("(loop () () (break 42))") == 42


@pytest.mark.parametrize("source,actual", [("(loop (i) (0) (break 1 2))", 2), ("(loop (i) (0) (break))", 0)])
def test_loop_must_return_one_value(itp, source, actual):
    with pytest.raises(NsSyntaxError) as exc:
        itp.eval_from_string(source)
    assert exc.value.code == "REQUIRE_LOOP_RETURN_ONE_VALUE"
    assert exc.value.data == {"actual": actual, "expect": 1}


def test_defnr_must_return_one_value(itp):
    itp.eval_from_string("(defnr f (a) (break a a))")
    with pytest.raises(NsSyntaxError) as exc:
        itp.eval_from_string("(f 1)")
    assert exc.value.code == "REQUIRE_RECURSION_FUNCTION_RETURN_ONE_VALUE"
    assert exc.value.data == {"actual": 2, "expect": 1}


@pytest.mark.parametrize(
    "source,actual,expect",
    [
        ("(loop (i) (0) (recur 1 2))", 2, 1),
        ("(loop (i j) (0) (break i))", 1, 2),
        ("(loop (i) (0) (recur))", 0, 1),
    ],
)
def test_loop_argument_count(itp, source, actual, expect):
    with pytest.raises(NsSyntaxError) as exc:
        itp.eval_from_string(source)
    assert exc.value.code == "INCORRECT_NUMBER_OF_LOOP_ARGS"
    assert exc.value.data == {"actual": actual, "expect": expect}


def test_defnr_recur_argument_count(itp):
    itp.eval_from_string("(defnr f (a) (recur 1 2))")
    with pytest.raises(NsSyntaxError) as exc:
        itp.eval_from_string("(f 1)")
    assert exc.value.code == "INCORRECT_NUMBER_OF_PARAMETERS"
    assert exc.value.data == {"name": "f", "actual": 2, "expect": 1}


def test_loop_init_values_must_be_a_list(itp):
    with pytest.raises(NsSyntaxError) as exc:
        itp.eval_from_string("(loop (i) 0 (break i))")
    assert exc.value.code == "INVALID_EXPRESSION"
