from .framework import Controller, Mailer, Message, MissingTemplate, RouteSet, registry
from .app import ThingController, ThingsController, draw, environment, mailer, routes
