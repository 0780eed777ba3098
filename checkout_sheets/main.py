# checkout_sheets/main.py
from checkout_sheets.observability.logging_setup import setup_logging, get_logger
from checkout_sheets.settings import build_settings
from checkout_sheets.web.server import run_http_server

def main():
    s = build_settings()
    setup_logging(s.observability.log_level, json_logs=s.observability.json_logs)
    log = get_logger()

    log.info(
        f"configuração carregada aba={s.sheets.sheet_name} "
        f"planilha_configurada={s.sheets.configured} janela_ms={s.dedup.window_ms}"
    )
    run_http_server(s)

if __name__ == "__main__":
    main()
