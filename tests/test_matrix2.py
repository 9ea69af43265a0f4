from Filter_Bank.utils import matrix2 as m2


A = ((1.0, 2.0), (3.0, 4.0))
B = ((0.5, -1.0), (2.0, 0.0))


def test_mat_vec():
    assert m2.mat_vec(A, (1.0, -1.0)) == (-1.0, -1.0)


def test_mat_mul():
    assert m2.mat_mul(A, B) == ((4.5, -1.0), (9.5, -3.0))
    assert m2.mat_mul(A, m2.IDENTITY) == A


def test_add_transpose_scale():
    assert m2.mat_add(A, B) == ((1.5, 1.0), (5.0, 4.0))
    assert m2.transpose(A) == ((1.0, 3.0), (2.0, 4.0))
    assert m2.scalar_mul(2.0, A) == ((2.0, 4.0), (6.0, 8.0))


def test_outer_and_trace():
    assert m2.outer((2.0, 3.0), (1.0, 0.0)) == ((2.0, 0.0), (3.0, 0.0))
    assert m2.trace(A) == 5.0


def test_identity_minus_gain_outer_observation():
    k, h = (0.25, 0.5), (1.0, 0.0)
    i_kh = m2.mat_add(m2.IDENTITY, m2.scalar_mul(-1.0, m2.outer(k, h)))
    assert i_kh == ((0.75, 0.0), (-0.5, 1.0))
