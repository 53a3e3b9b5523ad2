from .producto import Producto
