# core/vector.py
import math
import numbers

class Vector3:
    """
    A simple 3D vector class supporting arithmetic, dot and cross products,
    normalization, and the reflection/refraction formulas used by materials.
    Also used for points and colors.
    """
    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return Vector3(self.x * other, self.y * other, self.z * other)
        # Component-wise product, used for color attenuation.
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    __hash__ = None

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> "Vector3":
        # Zero vectors have no direction; dividing raises ZeroDivisionError.
        return self / self.length()

    def near_zero(self) -> bool:
        """
        True when every component is below 1e-8 in magnitude.
        """
        s = 1e-8
        return abs(self.x) < s and abs(self.y) < s and abs(self.z) < s

    def reflect(self, n: "Vector3") -> "Vector3":
        """
        Reflects this vector about the normal n.
        """
        return self - n * (2 * self.dot(n))

    def refract(self, n: "Vector3", eta_ratio: float) -> "Vector3":
        """
        Refracts this unit vector through a surface with unit normal n using
        Snell's law. eta_ratio is eta_incident / eta_transmitted.
        """
        cos_theta = min(-self.dot(n), 1.0)
        r_out_perp = (self + n * cos_theta) * eta_ratio
        r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
        return r_out_perp + r_out_parallel

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


Point3 = Vector3
Color = Vector3
