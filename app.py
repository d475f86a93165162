from datetime import date
from uuid import uuid4

import pandas as pd
import streamlit as st

from modules.gs1_client import parse_scan
from modules.partners import PartnerManager
from modules.products import ProductManager
from modules.reports import DSCSA_HEADERS, export_csv, generate_dscsa_csv, generate_filename, to_dataframe
from modules.settings import DEFAULT_SETTINGS, load_settings, save_settings
from modules.storage import PARTNER_ROLES, init_db
from modules.utils import expiry_status, safe_get


init_db()

ROLE_LABELS = {
    "sold_by": "Sold By",
    "sold_to": "Sold To",
    "ship_from": "Ship From",
    "ship_to": "Ship To",
}


def _ensure_session_state():
    if "scanned_items" not in st.session_state:
        st.session_state.scanned_items = []
    if "last_parsed" not in st.session_state:
        st.session_state.last_parsed = None
    if "partners" not in st.session_state:
        manager = PartnerManager()
        manager.load_partners()
        st.session_state.partners = manager
    if "products" not in st.session_state:
        manager = ProductManager()
        manager.load_products()
        st.session_state.products = manager


def _status_badge(status: str) -> str:
    if status == "Valid":
        return "✅ Valid"
    if status == "Near Expiry":
        return "⚠️ Near Expiry"
    if status == "Expired":
        return "❌ Expired"
    return "❔ Unknown"


def _render_scan_card(parsed: dict, settings: dict):
    if not parsed:
        return
    status = expiry_status(parsed.get("expiration"), settings["near_expiry_months"])
    st.markdown("### Scan Result")
    st.markdown(
        f"""
        <div style="border:1px solid #e0e0e0;padding:16px;border-radius:12px;background:#fafafa;">
            <div style="font-size:20px;font-weight:700;">{safe_get(parsed, "proprietary_name") or "Unknown GTIN"}</div>
            <div style="color:#666;margin-bottom:8px;">{safe_get(parsed, "product_description")}</div>
            <div><b>GTIN:</b> {safe_get(parsed, "gtin")}</div>
            <div><b>NDC:</b> {safe_get(parsed, "ndc")}</div>
            <div><b>Lot:</b> {safe_get(parsed, "lot")}</div>
            <div><b>Serial:</b> {safe_get(parsed, "serial")}</div>
            <div><b>Expiration:</b> {safe_get(parsed, "expiration")} <span>{_status_badge(status)}</span></div>
        </div>
        """,
        unsafe_allow_html=True,
    )
    if parsed.get("_lookup_error"):
        st.warning(parsed["_lookup_error"])


def _scan_page(settings: dict):
    st.header("Scan")

    with st.form("scan_form", clear_on_submit=True):
        scan_text = st.text_input("Scan Input", placeholder="Scan barcode here", key="scan_input")
        submitted = st.form_submit_button("Decode (Enter)")
    if submitted:
        ok, data, err = parse_scan(
            scan_text,
            lookup=settings.get("auto_lookup_product", True),
            products=st.session_state.products,
        )
        if ok:
            st.session_state.last_parsed = data
            serials = {item.get("serial") for item in st.session_state.scanned_items if item.get("serial")}
            if data.get("serial") and data["serial"] in serials:
                st.warning(f"Serial {data['serial']} already scanned.")
            else:
                data["item_id"] = str(uuid4())
                st.session_state.scanned_items.append(data)
        else:
            st.session_state.last_parsed = None
            st.error(err)

    _render_scan_card(st.session_state.last_parsed, settings)

    items = st.session_state.scanned_items
    st.subheader(f"Scanned Items ({len(items)})")
    if items:
        columns = ["gtin", "ndc", "lot", "serial", "expiration", "proprietary_name"]
        df = pd.DataFrame(items).reindex(columns=columns).fillna("")
        st.dataframe(df, use_container_width=True)
        remove_idx = st.number_input("Remove row #", min_value=1, max_value=len(items), step=1)
        col1, col2 = st.columns(2)
        if col1.button("Remove Row"):
            items.pop(int(remove_idx) - 1)
            st.rerun()
        if col2.button("Clear All"):
            st.session_state.scanned_items = []
            st.session_state.last_parsed = None
            st.rerun()

    _export_panel(settings)


def _partner_select(role: str) -> dict:
    partners = st.session_state.partners.list_partners(role)
    options = ["--"] + [f"{p['name']} ({p['gln']})" for p in partners]
    choice = st.selectbox(ROLE_LABELS[role], options, key=f"pick_{role}")
    if choice == "--":
        return {}
    return partners[options.index(choice) - 1]


def _export_panel(settings: dict):
    st.subheader("Transaction Details")
    with st.form("metadata_form"):
        col1, col2 = st.columns(2)
        default_date = date.today() if settings.get("default_transaction_date_today", True) else None
        transaction_date = col1.date_input("Transaction Date", value=default_date)
        shipment_date = col2.date_input("Shipment Date", value=default_date)
        po_number = col1.text_input("PO Number")
        del_document_number = col2.text_input("Del Document Number")
        direct_purchase = st.selectbox(
            "Direct Purchase",
            ["yes", "no"],
            index=0 if settings.get("direct_purchase", "yes") == "yes" else 1,
        )
        picked = {role: _partner_select(role) for role in PARTNER_ROLES}
        submitted = st.form_submit_button("Prepare CSV")

    if not submitted:
        return
    items = st.session_state.scanned_items
    if not items:
        st.error("Scan at least one item first.")
        return

    metadata = {
        "transaction_date": transaction_date.strftime("%m/%d/%Y") if transaction_date else "",
        "shipment_date": shipment_date.strftime("%m/%d/%Y") if shipment_date else "",
        "po_number": po_number,
        "del_document_number": del_document_number,
        "direct_purchase": direct_purchase,
    }
    for role, partner in picked.items():
        metadata[f"{role}_name"] = partner.get("name", "")
        metadata[f"{role}_gln"] = partner.get("gln", "")

    content = generate_dscsa_csv(items, metadata)
    filename = generate_filename(po_number)
    path = export_csv(content, filename)
    st.dataframe(to_dataframe(items, metadata), use_container_width=True)
    st.download_button("Download CSV", content, file_name=filename, mime="text/csv")
    st.caption(f"Saved to {path} ({len(DSCSA_HEADERS)} columns, {len(items)} rows)")


def _partners_page():
    st.header("Trading Partners")
    manager = st.session_state.partners

    with st.form("partner_form", clear_on_submit=True):
        role = st.selectbox("Role", PARTNER_ROLES, format_func=lambda r: ROLE_LABELS[r])
        name = st.text_input("Name *")
        gln = st.text_input("GLN *")
        submitted = st.form_submit_button("Save Partner")
    if submitted:
        if not name or not gln:
            st.error("Name and GLN are required.")
        else:
            manager.add_partner(role, name.strip(), gln.strip())
            st.success("Partner saved.")

    for role in PARTNER_ROLES:
        partners = manager.list_partners(role)
        st.subheader(f"{ROLE_LABELS[role]} ({len(partners)})")
        for idx, partner in enumerate(partners):
            col1, col2 = st.columns([4, 1])
            col1.write(f"{partner['name']} - {partner['gln']}")
            if col2.button("Remove", key=f"remove_partner_{role}_{idx}"):
                manager.remove_partner(role, idx)
                st.rerun()


def _products_page():
    st.header("Products")
    manager = st.session_state.products

    with st.form("product_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        gtin = col1.text_input("GTIN *")
        ndc = col2.text_input("NDC")
        product_description = st.text_input("Product Description")
        proprietary_name = col1.text_input("Proprietary Name")
        strength = col2.text_input("Strength")
        dosage_form = col1.text_input("Dosage Form")
        container_size = col2.text_input("Container Size")
        manufacturer = st.text_input("Manufacturer")
        submitted = st.form_submit_button("Save Product")
    if submitted:
        if not gtin:
            st.error("GTIN is required.")
        else:
            manager.add_product(
                gtin=gtin.strip(),
                ndc=ndc,
                product_description=product_description,
                proprietary_name=proprietary_name,
                strength=strength,
                dosage_form=dosage_form,
                container_size=container_size,
                manufacturer=manufacturer,
            )
            st.success("Product saved.")

    query = st.text_input("Search products")
    results = manager.search_products(query)
    if not results:
        st.info("No products found.")
        return
    st.dataframe(pd.DataFrame(results), use_container_width=True)
    remove_gtin = st.selectbox("Remove product", ["--"] + [p["gtin"] for p in results])
    if remove_gtin != "--" and st.button("Remove Product"):
        manager.remove_product_by_gtin(remove_gtin)
        st.rerun()


def _settings_page():
    st.header("Settings")
    settings = load_settings()
    with st.form("settings_form"):
        near_expiry = st.number_input(
            "Near expiry window (months)",
            min_value=0,
            max_value=60,
            value=int(settings.get("near_expiry_months", DEFAULT_SETTINGS["near_expiry_months"])),
        )
        direct_purchase = st.selectbox(
            "Default Direct Purchase",
            ["yes", "no"],
            index=0 if settings.get("direct_purchase", "yes") == "yes" else 1,
        )
        today_default = st.checkbox(
            "Default transaction/shipment date to today",
            value=bool(settings.get("default_transaction_date_today", True)),
        )
        auto_lookup = st.checkbox(
            "Look up product on scan",
            value=bool(settings.get("auto_lookup_product", True)),
        )
        submitted = st.form_submit_button("Save Settings")
    if submitted:
        save_settings(
            {
                "near_expiry_months": int(near_expiry),
                "direct_purchase": direct_purchase,
                "default_transaction_date_today": today_default,
                "auto_lookup_product": auto_lookup,
            }
        )
        st.success("Settings saved.")


def main():
    _ensure_session_state()
    settings = load_settings()

    st.sidebar.title("Navigation")
    page = st.sidebar.radio("Go to", ["Scan", "Partners", "Products", "Settings"])

    if page == "Scan":
        _scan_page(settings)
    elif page == "Partners":
        _partners_page()
    elif page == "Products":
        _products_page()
    elif page == "Settings":
        _settings_page()


st.set_page_config(page_title="DSCSA Scan Workbench", layout="wide")

if __name__ == "__main__":
    main()
