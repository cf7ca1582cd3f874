from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guards import current_principal, target_user
from ..common.serialization import to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    payroll_service = container.payroll_service

    @app.route("/api/salaries/user/<user_id>", methods=["GET"], endpoint="user_salaries")
    @guards.owns_user()
    def user_salaries(user_id: str):
        return jsonify(to_jsonable(list(payroll_service.list_for_user(target_user().id))))

    @app.route("/api/salaries/process", methods=["POST"], endpoint="process_salary")
    @guards.require_admin
    def process_salary():
        payload = request.get_json(silent=True) or {}
        principal = current_principal()
        employee = container.auth_service.verify_company_ownership(principal, payload.get("user_id"))
        salary = payroll_service.process(principal, employee, payload)
        return jsonify(to_jsonable(salary)), 201

    @app.route("/api/salaries/payslip/<salary_id>", methods=["GET"], endpoint="payslip")
    @guards.owns_resource("salary_id", payroll_service.get, label="Salary record")
    def payslip(salary_id: str):
        return jsonify({"salary": to_jsonable(g.resource), "employee": target_user().summary()})
