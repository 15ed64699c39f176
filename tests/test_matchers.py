from lnextract import any_of, check_attrs, key_in_attr, key_prefix, value_contains


def test_value_contains_class_list():
    assert value_contains('foo', 'bar foo baz')
    assert not value_contains('foo', 'foobar')
    assert value_contains('foo', 'foo')


def test_value_contains_splits_on_single_spaces_only():
    assert value_contains('foo', 'a  foo')
    assert not value_contains('', 'foo')
    assert not value_contains('foo', 'a\tfoo')
    assert not value_contains('foo', ' Foo ')


def test_key_in_attr_checks_key_first():
    cond = key_in_attr('class', 'entry-content')
    assert cond('class', 'entry-content clear')
    assert not cond('id', 'entry-content')


def test_check_attrs_none_accepts_anything():
    assert check_attrs(None, [])
    assert check_attrs(None, [('id', 'x')])


def test_check_attrs_short_circuits_in_source_order():
    seen = []

    def cond(k, v):
        seen.append(k)
        return v == 'hit'

    assert check_attrs(cond, [('a', 'miss'), ('b', 'hit'), ('c', 'hit')])
    assert seen == ['a', 'b']
    assert not check_attrs(cond, [])


def test_key_prefix_and_any_of():
    ad = any_of(key_in_attr('class', 'code-block'), key_prefix('id', 'atatags-'))
    assert ad('class', 'code-block code-block-4')
    assert ad('id', 'atatags-9981')
    assert not ad('id', 'post-42')
