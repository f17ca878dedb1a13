import io
from datetime import datetime

import pandas as pd
import streamlit as st

from dun_labels import (
    DUN_SAMPLE,
    LabelRecord,
    QrEntry,
    build_gs1_strings,
    normalize_expiry,
    validate_label,
)
from dun_labels.formatters.exporters import (
    export_invalid_labels_csv,
    export_label_set_json,
    export_labels_csv,
    invalid_labels_to_dataframe,
    labels_to_dataframe,
)
from dun_labels.importers.csv_importer import (
    LABEL_CSV_TEMPLATE,
    QR_CSV_TEMPLATE,
    import_labels_csv,
    import_qr_csv,
)
from dun_labels.exceptions import DunLabelsError
from dun_labels.logger import setup_logging
from dun_labels.reports import QR_PAPER_SIZES, QrSheetSettings, render_labels_pdf, render_qr_pdf
from dun_labels.storage import (
    delete_label_set,
    delete_qr_set,
    get_saved_label_sets,
    get_saved_qr_sets,
    init_db,
    load_label_set,
    load_qr_set,
    save_label_set,
    save_qr_set,
)
from modules.settings import DEFAULT_SETTINGS, load_settings, qr_sheet_from_settings, save_settings


setup_logging()
init_db()


def _stamp() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S")


def _ensure_session_state():
    if "labels" not in st.session_state:
        st.session_state.labels = []
    if "invalid_labels" not in st.session_state:
        st.session_state.invalid_labels = []
    if "qr_list" not in st.session_state:
        st.session_state.qr_list = []
    if "qr_sheet" not in st.session_state:
        st.session_state.qr_sheet = None
    if "form_label" not in st.session_state:
        st.session_state.form_label = DUN_SAMPLE


def _label_form(current: LabelRecord) -> LabelRecord:
    col1, col2 = st.columns(2)
    sku = col1.text_input("SKU", value=current.sku)
    gtin14 = col2.text_input("GTIN-14", value=current.gtin14, max_chars=14)
    product = st.text_input("Produto", value=current.product)
    col3, col4, col5 = st.columns(3)
    qty = col3.number_input("Qtd/Caixa", min_value=0, step=1, value=int(current.qty_per_box or 0))
    box_size = col4.text_input("Tam. Caixa", value=current.box_size)
    weight = col5.text_input("Peso (kg)", value=current.weight_kg)
    col6, col7 = st.columns(2)
    lot = col6.text_input("Lote (10)", value=current.lot or "")
    expiry = col7.text_input(
        "Validade (17)",
        value=current.expiry or "",
        help="YYYY-MM-DD, YYYYMMDD ou DD/MM/YYYY",
    )
    return LabelRecord(
        sku=sku.strip(),
        gtin14=gtin14.strip(),
        product=product.strip(),
        qty_per_box=int(qty),
        box_size=box_size.strip(),
        weight_kg=weight.strip(),
        lot=lot.strip() or None,
        expiry=normalize_expiry(expiry),
    )


def _validation_feedback(label: LabelRecord) -> bool:
    result = validate_label(label)
    if result.valid:
        st.success("Válido")
    else:
        for error in result.errors:
            st.error(error)
    return result.valid


def _pdf_download(labels, settings: dict, key: str):
    if not labels:
        return
    if st.button(f"Gerar PDF ({len(labels)} etiquetas)", key=f"{key}_render"):
        try:
            path = render_labels_pdf(
                labels,
                f"etiquetas-{_stamp()}.pdf",
                orientation=settings["orientation"],
                layout=settings["layout"],
                show_box_size=settings["show_box_size"],
                show_weight=settings["show_weight"],
            )
        except DunLabelsError as exc:
            st.error(str(exc))
            return
        st.download_button(
            "Baixar PDF",
            data=path.read_bytes(),
            file_name=path.name,
            mime="application/pdf",
            key=f"{key}_download",
        )


def _manual_page(settings: dict):
    st.header("Etiqueta DUN")
    label = _label_form(st.session_state.form_label)
    st.session_state.form_label = label
    valid = _validation_feedback(label)

    gs1 = build_gs1_strings(label.gtin14, lot=label.lot, expiry=label.expiry)
    st.code(gs1.human_readable)
    st.caption(f"Encoded: {gs1.value_for_encoding}")

    if st.button("Adicionar à lista", disabled=not valid):
        st.session_state.labels = st.session_state.labels + [label]
        st.success(f"Etiqueta {label.sku} adicionada.")

    _current_labels_section(settings)


def _current_labels_section(settings: dict):
    labels = st.session_state.labels
    if not labels:
        return
    st.subheader(f"Etiquetas ({len(labels)})")
    st.dataframe(labels_to_dataframe(labels), width="stretch")

    col1, col2 = st.columns(2)
    name = col1.text_input("Nome do conjunto", key="save_set_name")
    if col2.button("Salvar conjunto"):
        try:
            saved = save_label_set(name, labels, settings["orientation"])
            st.success(f"Conjunto salvo: {saved.name}")
        except DunLabelsError as exc:
            st.error(str(exc))

    if st.button("Exportar CSV"):
        path = export_labels_csv(labels)
        st.success(f"Saved: {path}")

    if st.button("Limpar lista"):
        st.session_state.labels = []
        st.rerun()

    _pdf_download(labels, settings, "current")


def _import_page(settings: dict):
    st.header("Importar CSV")
    st.download_button(
        "Baixar exemplo CSV",
        data=LABEL_CSV_TEMPLATE.encode("utf-8"),
        file_name="exemplo-etiquetas.csv",
        mime="text/csv",
    )
    uploaded = st.file_uploader("Arquivo CSV", type=["csv"])
    if uploaded is not None and st.button("Importar"):
        try:
            result = import_labels_csv(io.BytesIO(uploaded.getvalue()))
        except DunLabelsError as exc:
            st.error(str(exc))
            return
        st.session_state.labels = result.valid_labels
        st.session_state.invalid_labels = result.invalid_labels
        if result.invalid_labels:
            st.warning(
                f"Processamento concluído: {result.valid_count} etiquetas válidas, "
                f"{result.invalid_count} inválidas. Verifique os detalhes abaixo."
            )
        else:
            st.success(f"{result.valid_count} etiquetas importadas.")

    invalid = st.session_state.invalid_labels
    if invalid:
        st.subheader(f"Linhas inválidas ({len(invalid)})")
        st.dataframe(invalid_labels_to_dataframe(invalid), width="stretch")
        if st.button("Exportar inválidas"):
            path = export_invalid_labels_csv(invalid, f"etiquetas-invalidas-{_stamp()}.csv")
            st.success(f"Saved: {path}")

    _current_labels_section(settings)


def _saved_sets_page(settings: dict):
    st.header("Conjuntos salvos")
    sets = get_saved_label_sets()
    if not sets:
        st.info("Nenhum conjunto salvo.")
        return

    set_map = {f"{s.name} | {s.created_at} | {len(s.labels)} etiquetas": s.id for s in sets}
    selection = st.selectbox("Conjunto", list(set_map.keys()))
    set_id = set_map[selection]
    label_set = load_label_set(set_id)
    if label_set is None:
        st.error("Conjunto não encontrado.")
        return

    st.dataframe(labels_to_dataframe(label_set.labels), width="stretch")
    col1, col2, col3 = st.columns(3)
    if col1.button("Carregar"):
        st.session_state.labels = list(label_set.labels)
        st.success(f"{len(label_set.labels)} etiquetas carregadas.")
    if col2.button("Exportar JSON"):
        path = export_label_set_json(label_set)
        st.success(f"Saved: {path}")
    if col3.button("Excluir"):
        delete_label_set(set_id)
        st.rerun()

    _pdf_download(label_set.labels, {**settings, "orientation": label_set.orientation}, "saved")


def _qr_settings(defaults: QrSheetSettings) -> QrSheetSettings:
    paper_sizes = list(QR_PAPER_SIZES) + ["custom"]
    col1, col2, col3 = st.columns(3)
    paper = col1.selectbox(
        "Papel",
        paper_sizes,
        index=paper_sizes.index(defaults.paper_size) if defaults.paper_size in paper_sizes else 0,
    )
    width_mm = col2.number_input("Largura (mm)", min_value=10, value=int(defaults.width_mm))
    height_mm = col3.number_input("Altura (mm)", min_value=10, value=int(defaults.height_mm))
    qr_size = st.slider("Tamanho QR (%)", 30, 100, int(defaults.qr_size_percent))
    auto_font = st.checkbox("Fonte automática", value=bool(defaults.auto_font))
    col4, col5 = st.columns(2)
    label_font = col4.number_input("Fonte label (px)", min_value=4, value=int(defaults.label_font_size))
    value_font = col5.number_input("Fonte valor (px)", min_value=4, value=int(defaults.value_font_size))
    col6, col7 = st.columns(2)
    color = col6.color_picker("Cor", value=defaults.color)
    bg_color = col7.color_picker("Fundo", value=defaults.bg_color)
    col8, col9 = st.columns(2)
    show_label = col8.checkbox("Mostrar label", value=bool(defaults.show_label))
    show_value = col9.checkbox("Mostrar valor", value=bool(defaults.show_value))
    return QrSheetSettings(
        paper_size=paper,
        width_mm=width_mm,
        height_mm=height_mm,
        qr_size_percent=qr_size,
        label_font_size=label_font,
        value_font_size=value_font,
        auto_font=auto_font,
        color=color,
        bg_color=bg_color,
        show_label=show_label,
        show_value=show_value,
        orientation=defaults.orientation,
    )


def _qr_page(settings: dict):
    st.header("QR Codes")
    st.download_button(
        "Baixar exemplo CSV",
        data=QR_CSV_TEMPLATE.encode("utf-8"),
        file_name="exemplo-qrcode.csv",
        mime="text/csv",
    )
    uploaded = st.file_uploader("CSV (label,value)", type=["csv"], key="qr_upload")
    if uploaded is not None and st.button("Importar QR"):
        try:
            st.session_state.qr_list = import_qr_csv(io.BytesIO(uploaded.getvalue()))
        except DunLabelsError as exc:
            st.error(str(exc))

    with st.form("qr_manual", clear_on_submit=True):
        label = st.text_input("Label (opcional)")
        value = st.text_input("Valor")
        if st.form_submit_button("Adicionar") and value.strip():
            st.session_state.qr_list = st.session_state.qr_list + [
                QrEntry(value=value.strip(), label=label.strip() or None)
            ]

    if st.session_state.qr_sheet is not None:
        defaults = QrSheetSettings.from_dict(st.session_state.qr_sheet)
    else:
        defaults = qr_sheet_from_settings(settings)
    sheet = _qr_settings(defaults)
    qr_list = st.session_state.qr_list
    if not qr_list:
        return

    st.dataframe(pd.DataFrame([e.to_dict() for e in qr_list]), width="stretch")
    col1, col2 = st.columns(2)
    name = col1.text_input("Nome do conjunto", key="qr_set_name")
    if col2.button("Salvar conjunto QR"):
        try:
            saved = save_qr_set(name, qr_list, sheet.orientation, sheet.to_dict())
            st.success(f"Conjunto salvo: {saved.name}")
        except DunLabelsError as exc:
            st.error(str(exc))

    if st.button(f"Gerar PDF ({len(qr_list)} etiquetas)", key="qr_render"):
        try:
            path = render_qr_pdf(qr_list, f"qrcodes-{_stamp()}.pdf", sheet)
        except DunLabelsError as exc:
            st.error(str(exc))
        else:
            st.download_button("Baixar PDF", data=path.read_bytes(), file_name=path.name, mime="application/pdf")

    if st.button("Limpar QR"):
        st.session_state.qr_list = []
        st.session_state.qr_sheet = None
        st.rerun()

    saved_sets = get_saved_qr_sets()
    if saved_sets:
        st.subheader("Conjuntos QR salvos")
        set_map = {f"{s.name} | {s.created_at} | {len(s.qr_list)} QR": s.id for s in saved_sets}
        selection = st.selectbox("Conjunto QR", list(set_map.keys()))
        col3, col4 = st.columns(2)
        if col3.button("Carregar QR"):
            qr_set = load_qr_set(set_map[selection])
            if qr_set:
                st.session_state.qr_list = list(qr_set.qr_list)
                st.session_state.qr_sheet = qr_set.settings or None
                st.rerun()
        if col4.button("Excluir QR"):
            delete_qr_set(set_map[selection])
            st.rerun()


def _settings_page():
    st.header("Settings")
    settings = load_settings()
    with st.form("settings_form"):
        orientation = st.selectbox(
            "Orientação",
            ["portrait", "landscape"],
            index=0 if settings["orientation"] == "portrait" else 1,
        )
        layout = st.selectbox(
            "Layout",
            ["single", "double"],
            index=0 if settings["layout"] == "single" else 1,
        )
        show_box_size = st.checkbox("Mostrar tamanho da caixa", value=bool(settings["show_box_size"]))
        show_weight = st.checkbox("Mostrar peso da caixa", value=bool(settings["show_weight"]))
        saved = st.form_submit_button("Save Settings")

    if saved:
        save_settings(
            {
                "orientation": orientation,
                "layout": layout,
                "show_box_size": show_box_size,
                "show_weight": show_weight,
            }
        )
        st.success("Settings saved.")

    if st.button("Restore defaults"):
        save_settings(DEFAULT_SETTINGS)
        st.rerun()


def main():
    _ensure_session_state()
    settings = load_settings()

    st.sidebar.title("Navigation")
    page = st.sidebar.radio(
        "Go to",
        [
            "Etiqueta DUN",
            "Importar CSV",
            "Conjuntos salvos",
            "QR Codes",
            "Settings",
        ],
    )

    if page == "Etiqueta DUN":
        _manual_page(settings)
    elif page == "Importar CSV":
        _import_page(settings)
    elif page == "Conjuntos salvos":
        _saved_sets_page(settings)
    elif page == "QR Codes":
        _qr_page(settings)
    elif page == "Settings":
        _settings_page()


st.set_page_config(page_title="Etiquetas DUN / GS1", layout="wide")

if __name__ == "__main__":
    main()
