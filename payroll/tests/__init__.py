# payroll tests package
