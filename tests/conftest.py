"""
공용 fixture와 예제 회로 빌더.

각 게이트 인자는 (column, row, value): value는 배선 값, (column, row)는
순열 σ가 이 위치를 보내는 대상이다.
"""

import random

import pytest

from plonk_kzg.circuit import Circuit
from plonk_kzg.config import set_config
from plonk_kzg.srs import SRS


def build_polynomial_circuit(pin_output=True, output_public_input=None, output=11):
    """xy + 3x² + xyz = 11  (x=1, y=2, z=3)

    게이트 0 (mul): x · y = 2
    게이트 1 (mul): x · x = 1
    게이트 2 (mul): x² · 3 = 3
    게이트 3 (add): xy + 3x² = 5
    게이트 4 (mul): xy · z = 6
    게이트 5 (add): 5 + 6 = 11
    게이트 6 (const): 상수 3 고정
    게이트 7 (const): 출력 11 고정   (pin_output=False면 생략)

    output은 게이트 5의 c 값 (witness가 주장하는 출력)이다.

    output_public_input=k 이면 게이트 5를 a + b = c + k 형태로 만들고 c = 11 - k.
    """
    circuit = Circuit()
    circuit.add_multiplication_gate((0, 1, 1), (1, 0, 2), (0, 3, 2))
    circuit.add_multiplication_gate((1, 1, 1), (0, 0, 1), (0, 2, 1))
    circuit.add_multiplication_gate((2, 1, 1), (0, 6, 3), (1, 3, 3))
    circuit.add_addition_gate((0, 4, 2), (2, 2, 3), (0, 5, 5))
    circuit.add_multiplication_gate((2, 0, 2), (1, 4, 3), (1, 5, 6))
    if output_public_input is not None:
        circuit.add_addition_gate((2, 3, 5), (2, 4, 6), (2, 5, 11 - output_public_input),
                                  public_input=output_public_input)
    elif pin_output:
        circuit.add_addition_gate((2, 3, 5), (2, 4, 6), (0, 7, output))
    else:
        circuit.add_addition_gate((2, 3, 5), (2, 4, 6), (2, 5, output))
    circuit.add_constant_gate((1, 2, 3), (1, 6, 0), (2, 6, 0), constant=3)
    if pin_output and output_public_input is None:
        circuit.add_constant_gate((2, 5, output), (1, 7, 0), (2, 7, 0), constant=11)
    return circuit


def build_pythagorean_circuit(hypotenuse_square=25):
    """x² + y² = z²  (3, 4, 5)

    게이트 0 (mul): x · x = 9
    게이트 1 (mul): y · y = 16
    게이트 2 (mul): z · z = 25
    게이트 3 (add): 9 + 16 = 25   (c 값을 hypotenuse_square로 바꿀 수 있다)
    """
    circuit = Circuit()
    circuit.add_multiplication_gate((1, 0, 3), (0, 0, 3), (0, 3, 9))
    circuit.add_multiplication_gate((1, 1, 4), (0, 1, 4), (1, 3, 16))
    circuit.add_multiplication_gate((1, 2, 5), (0, 2, 5), (2, 3, 25))
    circuit.add_addition_gate((2, 0, 9), (2, 1, 16), (2, 2, hypotenuse_square))
    return circuit


def build_product_circuit(product=6, constant=6):
    """xyz = 6  (x=1, y=2, z=3)

    게이트 0 (mul): x · y = 2
    게이트 1 (mul): 2 · z = product
    게이트 2 (const): product == constant
    """
    circuit = Circuit()
    circuit.add_multiplication_gate((0, 0, 1), (1, 0, 2), (0, 1, 2))
    circuit.add_multiplication_gate((2, 0, 2), (1, 1, 3), (0, 2, product))
    circuit.add_constant_gate((2, 1, product), (1, 2, 0), (2, 2, 0), constant=constant)
    return circuit


class Scenarios:
    """테스트에서 새 (미컴파일) 회로를 만들 때 사용한다."""

    polynomial = staticmethod(build_polynomial_circuit)
    pythagorean = staticmethod(build_pythagorean_circuit)
    product = staticmethod(build_product_circuit)


@pytest.fixture(scope="session")
def scenarios():
    return Scenarios


@pytest.fixture(autouse=True)
def _reset_config():
    """테스트마다 전역 설정을 환경 기본값으로 되돌린다."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture(scope="session")
def srs():
    return SRS.generate(max_degree=16, seed=1234)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture(scope="module")
def polynomial_compiled(srs):
    return build_polynomial_circuit().compile(srs)


@pytest.fixture(scope="module")
def polynomial_proof(polynomial_compiled):
    return polynomial_compiled.prove(rng=random.Random(7))


@pytest.fixture(scope="module")
def pythagorean_compiled(srs):
    return build_pythagorean_circuit().compile(srs)


@pytest.fixture(scope="module")
def product_compiled(srs):
    return build_product_circuit().compile(srs)
