"""Modelos, errores y decodificadores del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce rutas, CLI ni el host: solo perfiles y credenciales.
"""
