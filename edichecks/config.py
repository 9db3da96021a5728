import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    supabase_url: str = os.getenv("SUPABASE_URL", "")
    supabase_key: str = os.getenv("SUPABASE_ANON_KEY", "")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Related sales order hook (EDI 860 / PO change)
    sales_order_table: str = os.getenv("SALES_ORDER_TABLE", "sales_orders")
    document_table: str = os.getenv("DOCUMENT_TABLE", "po_change_documents")
    po_number_field: str = "custbody_sps_cx_ponumber"
    customer_id_field: str = "custbody_po_change_customer_id"
    related_trxn_field: str = "custbody_sps_cx_related_trxn"
    owner_field: str = "entity"
    primary_key_field: str = "externalid"
    secondary_key_field: str = "otherrefnum"
    candidate_page_size: int = 1000

    # Pallet JSON validation (EDI 856 / ASN)
    pallet_json_var: str = os.getenv("PALLET_JSON_VAR", "PALLET_JSON_STRING")
    missing_sentinels: tuple[str, ...] = ("", "{}", "null")
    error_delimiter: str = ", "

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
