"""📦 core/ — Building blocks universales del sistema

✨ ¿Qué pertenece aquí?
   • Value Objects matemáticos/lógicos reusables en CUALQUIER dominio:
     - PositiveValue, NonEmptyText
   • Tipos primitivos validados
   • Helpers genéricos SIN dependencia de negocio

🚫 ¿Qué NO pertenece aquí?
   • Entidades específicas del dominio (TypedValue, Checksum, ValueType)
   • Reglas de negocio (coerción de tipos, clasificación de strings, Base64)

✅ Dónde poner lo específico del dominio:
   → modules/{bounded_context}/domain/

💡 Principio preventivo:
   Si no podrías reusar este código en un sistema de pagos O un e-commerce,
   probablemente NO pertenece a core/.
"""

from .value_objects import NonEmptyText, PositiveValue

__all__ = ["NonEmptyText", "PositiveValue"]
