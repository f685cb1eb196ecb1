"""Shopping cart for static sites with a hosted checkout session creator"""

__version__ = "1.0.0"
