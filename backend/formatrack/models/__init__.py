# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.

from formatrack.models.user import User  # noqa: F401
from formatrack.models.client import Client  # noqa: F401
from formatrack.models.cours import Cours, CoursClient  # noqa: F401
from formatrack.models.presence import AbsenceRetard, Presence  # noqa: F401
from formatrack.models.paiement import Paiement  # noqa: F401
