#!/usr/bin/env python

import argparse
import configparser

from aiohttp import web

from telegram_login.config import load_config
from telegram_login.web_app import create_web_app


def main():
    parser = argparse.ArgumentParser(description="Telegram Login Widget verifier")
    parser.add_argument("-c", "--config", type=str, default="config.ini", help="Path to config file")
    args = parser.parse_args()

    config_file = configparser.ConfigParser()
    config_file.read(args.config)
    config = load_config(config_file)

    app = create_web_app(config)
    print(f"[Server] Login page at http://{config.host}:{config.port}/auth/{config.name}")
    web.run_app(app, host=config.host, port=config.port, print=None)


if __name__ == "__main__":
    main()
