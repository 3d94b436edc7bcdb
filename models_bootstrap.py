# models_bootstrap.py
from organization import models as _org_models
from gate import models as _gate_models
from staff import models as _staff_models
from shift import models as _shift_models
