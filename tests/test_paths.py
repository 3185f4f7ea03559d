from ninjadiag.core.paths import normalize_path

def test_normalize_path_drops_parent_segment():
    assert normalize_path("a/b/../c") == "a/c"

def test_normalize_path_keeps_leading_parent():
    assert normalize_path("../a") == "../a"

def test_normalize_path_keeps_stacked_leading_parents():
    assert normalize_path("../../base/../app/box.h") == "../../app/box.h"

def test_normalize_path_multiple_parents():
    assert normalize_path("a/b/c/../../d") == "a/d"

def test_normalize_path_untouched_without_parents():
    assert normalize_path("src/app/main.cc") == "src/app/main.cc"
    assert normalize_path("main.cc") == "main.cc"

def test_normalize_path_is_idempotent():
    for path in ["a/b/../c", "../a", "../../x/../y/z.h", "/abs/p/../q.cc", "plain.cc"]:
        once = normalize_path(path)
        assert normalize_path(once) == once

def test_normalize_path_leading_parent_survives_later_fold():
    assert normalize_path("../inc/../outer.h") == "../outer.h"
