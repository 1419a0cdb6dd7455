"""
models/__init__.py
------------------
Re-export all models so create_tables.py (and Alembic's env.py, if added)
can import Base and discover all tables via a single import:

    from backoffice.models import Base
"""

from backoffice.db.base import Base
from backoffice.models.tenant import Tenant
from backoffice.models.attachment import Attachment
from backoffice.models.challan import Challan, ChallanStatus
from backoffice.models.control import Control, ControlType
from backoffice.models.eway_bill import EWayBill, EWayBillStatus
from backoffice.models.forecast import Forecast
from backoffice.models.itc_record import ItcMatchStatus, ItcRecord
from backoffice.models.tax_provision import TaxProvision
from backoffice.models.tax_rate import TaxRate, TaxRateType

__all__ = [
    "Base",
    "Tenant",
    "Attachment",
    "Challan",
    "ChallanStatus",
    "Control",
    "ControlType",
    "EWayBill",
    "EWayBillStatus",
    "Forecast",
    "ItcMatchStatus",
    "ItcRecord",
    "TaxProvision",
    "TaxRate",
    "TaxRateType",
]
