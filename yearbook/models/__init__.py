# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# Sans cet import, les FK comme alumni_requests.user_id → users.id échouent
# avec NoReferencedTableError si user.py n'est pas chargé avant alumni.py.

from yearbook.models.school import School  # noqa: F401  (doit précéder user)
from yearbook.models.user import User  # noqa: F401
from yearbook.models.student import Student  # noqa: F401
from yearbook.models.alumni import AlumniBadge, AlumniRequest, AlumniRequestBlock  # noqa: F401
from yearbook.models.notification import Notification  # noqa: F401
