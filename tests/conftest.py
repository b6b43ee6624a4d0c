import pytest

from fibrope.config import set_config

STR1 = "This_is_a_test."
STR2 = "Here is a much longer string for testing!"
PARAGRAPH = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Maecenas sapien diam, "
    "maximus a mauris sed, posuere tincidunt tellus. Morbi sapien enim, vehicula sed "
    "imperdiet vel, pharetra vel lorem. Nullam pharetra justo ac elit varius, ut "
    "accumsan nisl eleifend. Mauris in condimentum augue. In consequat justo nunc, sit "
    "amet efficitur orci scelerisque at. Suspendisse ac ullamcorper urna, eget "
    "tincidunt risus. Suspendisse cursus nisl et volutpat ultrices. Integer posuere, "
    "diam vel tempus egestas, nisl leo tincidunt metus, nec semper risus nisl sit amet "
    "tortor. Morbi blandit sem sed nisi facilisis condimentum. Cras lacinia aliquet "
    "erat, nec finibus magna. Curabitur efficitur ante vitae efficitur vestibulum. Nam "
    "a accumsan urna, vitae consectetur lorem. Proin rutrum ultrices sapien ac "
    "tincidunt. Phasellus semper vel leo quis semper."
)


@pytest.fixture
def str1():
    return STR1


@pytest.fixture
def str2():
    return STR2


@pytest.fixture
def paragraph():
    return PARAGRAPH


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop the cached RopeConfig around every test so env changes do not leak."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def skewed_rope():
    """Build "abcdef" by prepending one byte at a time; unbalanced by construction."""
    from fibrope import Rope

    rope = Rope("f")
    for ch in "edcba":
        rope.insert(0, Rope(ch))
    return rope
