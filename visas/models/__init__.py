# visas/
# ├── models/
# │   ├── # 1. The Catalog (Admin Side)
# │   ├── country.py                 <-- "Thailand", "Japan"
# │   ├── visa_type.py               <-- "Tourist 60 days" (fee, processing days)
# │   ├── visa_requirement.py        <-- dynamic form inputs per country
# │   │
# │   ├── # 2. The Application (Client Side)
# │   ├── visa_application.py        <-- the main record
# │   └── visa_application_file.py   <-- the uploaded files

from .country import Country
from .visa_type import VisaType
from .visa_requirement import VisaRequirement
from .visa_application import VisaApplication
from .visa_application_file import VisaApplicationFile
