class Material:

    def __init__(self, k_d, k_a=1.0, k_s=0.0, p=20.0):
        """
        Create a new material with the given parameters.

        Parameters:
          k_d : (3,) -- Diffuse color
          k_a : float -- Ambient coefficient, scales the scene's ambient color
          k_s : float -- Specular coefficient, scales a white highlight
          p : float -- Specular exponent (shininess)

        k_a and k_s are meant to lie in [0, 1] but are not checked.
        """
        self.k_d = k_d
        self.k_a = k_a
        self.k_s = k_s
        self.p = p
