# shoepos/__init__.py
"""Backend de inventario y ventas para punto de venta de calzado"""

__version__ = "1.0.0"
