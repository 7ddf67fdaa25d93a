#!/usr/bin/env python3
"""
Inicia o servidor HTTP da IDE LOOP/WHILE/GOTO.
"""
import argparse
import webbrowser
from threading import Timer

import uvicorn

HOST = "127.0.0.1"
PORT = 8000
BROWSER_DELAY = 2.0

def build_argparser():
    argparser = argparse.ArgumentParser(
        prog="lwg-server", description="Servidor HTTP dos interpretadores e tradutores LOOP/WHILE/GOTO"
    )
    argparser.add_argument("--host", default=HOST)
    argparser.add_argument("--port", type=int, default=PORT)
    argparser.add_argument("--reload", action="store_true", help="Recarrega o servidor quando o código muda")
    argparser.add_argument("--no-browser", action="store_true", help="Não abre a documentação interativa")
    return argparser

def docs_url(host, port):
    # 0.0.0.0 não é um endereço navegável
    if host in ("0.0.0.0", "::"):
        host = "localhost"
    return f"http://{host}:{port}/docs"

def main(argv=None):
    args = build_argparser().parse_args(argv)

    if not args.no_browser:
        Timer(BROWSER_DELAY, webbrowser.open, args=(docs_url(args.host, args.port),)).start()

    uvicorn.run("main:app", host=args.host, port=args.port, reload=args.reload)
    return 0

if __name__ == "__main__":
    main()
