"""📦 modules/ — Bounded contexts específicos del negocio

✨ Estado actual:
   • values/ → Valores tipados de metadatos (coerción, clasificación, Base64)

📚 Cada módulo contiene sus propias capas Clean Architecture:
   • domain/         → Entidades, value objects y reglas puras
   • application/    → Casos de uso
   • infrastructure/ → Adaptadores concretos (disco, logging)
   • presentation/   → CLI
"""
