"""
PLONK 산술 게이트 (Arithmetic Gate)
====================================

게이트 방정식:

    q_M·a·b + q_L·a + q_R·b + q_O·c + q_C + PI = 0

**게이트 유형별 셀렉터 설정**:
  | 유형   | q_L | q_R | q_O | q_M | q_C       | 의미          |
  |--------|-----|-----|-----|-----|-----------|---------------|
  | 덧셈   |  1  |  1  | -1  |  0  |  0        | a + b = c     |
  | 곱셈   |  0  |  0  | -1  |  1  |  0        | a · b = c     |
  | 상수   |  1  |  0  |  0  |  0  | -constant | a = constant  |
  | 더미   |  0  |  0  |  0  |  0  |  0        | (패딩)        |

공개 입력(public input)은 PI = -public_input 으로 저장된다.
예: 덧셈 게이트에 public_input = k를 주면 a + b - c - k = 0.

**배선(Wire)**:
  각 배선 위치 (column, row)에는 순열 σ가 보내는 다른 위치가 기록된다.
  column 0/1/2는 각각 a/b/c 열을 뜻한다. 자기 자신을 가리키면 항등.
"""

from plonk_kzg.field import FR, to_fr


# 배선 열 번호
COLUMN_A = 0
COLUMN_B = 1
COLUMN_C = 2
NUM_COLUMNS = 3


class Wire:
    """순열 σ의 대상 위치 (column, row)."""

    __slots__ = ("column", "row")

    def __init__(self, column, row):
        self.column = column
        self.row = row

    def as_tuple(self):
        return (self.column, self.row)

    def __eq__(self, other):
        if not isinstance(other, Wire):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return f"Wire({self.column}, {self.row})"


class Gate:
    """PLONK 게이트 한 행 (배선 3개 + 셀렉터 5개 + 공개 입력)."""

    def __init__(self, a_wire, b_wire, c_wire, q_l=0, q_r=0, q_m=0, q_o=0, q_c=0, pi=0):
        self.a_wire = a_wire
        self.b_wire = b_wire
        self.c_wire = c_wire
        self.q_l = to_fr(q_l)
        self.q_r = to_fr(q_r)
        self.q_m = to_fr(q_m)
        self.q_o = to_fr(q_o)
        self.q_c = to_fr(q_c)
        self.pi = to_fr(pi)

    @property
    def wires(self):
        return (self.a_wire, self.b_wire, self.c_wire)

    @classmethod
    def addition(cls, a_wire, b_wire, c_wire, public_input=0):
        return cls(a_wire, b_wire, c_wire, q_l=1, q_r=1, q_o=-1, pi=-to_fr(public_input))

    @classmethod
    def multiplication(cls, a_wire, b_wire, c_wire, public_input=0):
        return cls(a_wire, b_wire, c_wire, q_m=1, q_o=-1, pi=-to_fr(public_input))

    @classmethod
    def constant(cls, a_wire, b_wire, c_wire, constant, public_input=0):
        return cls(a_wire, b_wire, c_wire, q_l=1, q_c=-to_fr(constant), pi=-to_fr(public_input))

    @classmethod
    def dummy(cls, row):
        """패딩용 게이트. 모든 셀렉터가 0이고 배선은 자기 자신을 가리킨다."""
        return cls(Wire(COLUMN_A, row), Wire(COLUMN_B, row), Wire(COLUMN_C, row))

    def check(self, a, b, c):
        """q_M·a·b + q_L·a + q_R·b + q_O·c + q_C + PI == 0 ?"""
        a, b, c = to_fr(a), to_fr(b), to_fr(c)
        total = (self.q_m * a * b + self.q_l * a + self.q_r * b
                 + self.q_o * c + self.q_c + self.pi)
        return total == FR(0)

    def __repr__(self):
        return (f"Gate(q_l={int(self.q_l)}, q_r={int(self.q_r)}, q_m={int(self.q_m)}, "
                f"q_o={int(self.q_o)}, q_c={int(self.q_c)}, pi={int(self.pi)}, "
                f"wires={self.wires})")
