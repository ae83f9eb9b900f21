"""
Built-in demos shown on the documentation site.

Each entry knows its pristine sources; the registry compiles them once to
obtain the demo's initial (fallback) instance.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from livedemo.engines import FORM_VARIANT, PAGE_VARIANT, CompilationScope, SourceUnit, Variant
from livedemo.lumino import form_scope, page_scope

CONTACT_FORM = """\
// 1. Define your entity
class Contact {
  firstName = "";
  lastName = "";
  email = "";
  phone = "";
  company = "";
  role = "";
  subscribeNewsletter = false;
}

// 2. Define options for select fields
const roleOptions = [
  { value: "developer", label: "Developer" },
  { value: "designer", label: "Designer" },
  { value: "manager", label: "Manager" },
  { value: "other", label: "Other" },
];

// 3. Create your form class
class ContactForm extends Form<Contact> {
  constructor() {
    super("contact-form");
  }

  configure() {
    this.addSection("Personal Information")
      .addRow()
        .addField("firstName")
          .component(LuminoTextInput)
          .label("First Name")
          .placeholder("Enter first name")
          .rules(Validators.required({ message: "First name is required" }))
          .endField()
        .addField("lastName")
          .component(LuminoTextInput)
          .label("Last Name")
          .placeholder("Enter last name")
          .rules(Validators.required({ message: "Last name is required" }))
          .endField()
        .layout([1, 1])
      .endRow()
      .addRow()
        .addField("email")
          .component(LuminoTextInput)
          .label("Email")
          .placeholder("you@example.com")
          .rules(
            Validators.required({ message: "Email is required" }),
            Validators.email("Please enter a valid email")
          )
          .endField()
        .addField("phone")
          .component(LuminoTextInput)
          .label("Phone")
          .placeholder("+1 (555) 123-4567")
          .endField()
        .layout([1, 1])
      .endRow()
    .endSection();

    this.addSection("Professional Information")
      .addRow()
        .addField("company")
          .component(LuminoTextInput)
          .label("Company")
          .endField()
        .addField("role")
          .component(LuminoSelect)
          .label("Role")
          .props({ options: roleOptions })
          .endField()
        .layout([1, 1])
      .endRow()
      .addRow()
        .addField("subscribeNewsletter")
          .component(LuminoCheckbox)
          .label("Subscribe to newsletter")
          .endField()
      .endRow()
    .endSection();

    this.addRow()
      .addComponent(LuminoButton)
        .children("Submit")
        .props({ variant: "primary" })
        .onClick(async (ctx) => {
          const isValid = await ctx.validate?.();
          if (isValid) {
            ctx.notify?.("Form is valid!", "success");
          }
        })
      .endComponent()
    .endRow();
  }
}
"""

EMPLOYEE_ENTITY = """\
import { Form, Validators } from "lumino/core";
import { LuminoTextInput, LuminoNumberInput, LuminoSelect, LuminoSwitch } from "lumino/react";

export class Employee {
  id?: number;
  firstName = "Ada";
  lastName = "Lovelace";
  email = "ada@example.com";
  age: number | null = 36;
  department = "engineering";
  isActive = true;
}

const departments = ["engineering", "design", "sales"].map((value) => ({
  value,
  label: value.charAt(0).toUpperCase() + value.slice(1),
}));

export class EmployeeForm extends Form<Employee> {
  constructor() {
    super("employee-form");
  }

  configure() {
    this.setReadOnly((ctx) => ctx.mode === "view");

    this.addSection("Employee")
      .addRow()
        .addField("firstName")
          .component(LuminoTextInput)
          .label("First Name")
          .required("First name is required")
        .endField()
        .addField("lastName")
          .component(LuminoTextInput)
          .label("Last Name")
          .required()
        .endField()
        .layout([1, 1])
      .endRow()
      .addRow()
        .addField("email")
          .component(LuminoTextInput)
          .label("Email")
          .rules(Validators.email({ message: "Enter a valid email" }))
        .endField()
        .addField("age")
          .component(LuminoNumberInput)
          .label("Age")
          .props({ min: 18, max: 100 })
          .rules(Validators.min(18), Validators.max(100))
        .endField()
      .endRow()
      .addRow()
        .addField("department")
          .component(LuminoSelect)
          .label("Department")
          .props({ options: departments })
        .endField()
        .addField("isActive")
          .component(LuminoSwitch)
          .label("Active")
        .endField()
      .endRow()
    .endSection();
  }
}
"""

OPTIONS = """\
/**
 * Static option lists for Select and RadioGroup fields.
 */

export const addressTypes = [
  { value: "home", label: "Home" },
  { value: "work", label: "Work" },
  { value: "other", label: "Other" },
];

export const departments = [
  { value: "engineering", label: "Engineering" },
  { value: "design", label: "Design" },
  { value: "marketing", label: "Marketing" },
  { value: "sales", label: "Sales" },
  { value: "hr", label: "Human Resources" },
];

export const countries = [
  { value: "us", label: "United States" },
  { value: "uk", label: "United Kingdom" },
  { value: "ca", label: "Canada" },
  { value: "de", label: "Germany" },
];
"""

EMPLOYEE_MODEL = """\
import { Address } from "./Address";
import { Experience } from "./Experience";

export class Employee {
  id?: number;
  firstName = "";
  lastName = "";
  email = "";
  department = "";
  country = "us";
  addresses: Address[] = [];
  experiences: Experience[] = [];
}

export const createEmptyEmployee = (): Employee => new Employee();

export const createSampleEmployee = (): Employee => {
  const emp = new Employee();
  emp.id = 1;
  emp.firstName = "Grace";
  emp.lastName = "Hopper";
  emp.email = "grace.hopper@example.com";
  emp.department = "engineering";
  emp.addresses = [
    { type: "home", street: "123 Oak Avenue", city: "Arlington", zipCode: "22201", country: "us" },
  ];
  emp.experiences = [
    { company: "Navy", title: "Rear Admiral", startDate: "1943-12-01", endDate: "1986-08-14" },
  ];
  return emp;
};
"""

ADDRESS_MODEL = """\
export class Address {
  type: "home" | "work" | "other" = "home";
  street = "";
  city = "";
  zipCode = "";
  country = "us";
}
"""

EXPERIENCE_MODEL = """\
export class Experience {
  company = "";
  title = "";
  startDate = "";
  endDate = "";
}
"""

ADDRESS_FIELDS = """\
import { Component, Validators } from "lumino/core";
import { LuminoTextInput, LuminoSelect, LuminoButton } from "lumino/react";
import { addressTypes, countries } from "./options";

export class AddressFields extends Component<Address> {
  configure() {
    this.addRow()
      .addField("type")
        .component(LuminoSelect)
        .label("Address Type")
        .props({ options: addressTypes })
        .rules(Validators.required({ message: "Address type is required" }))
      .endField()
    .endRow();

    this.addRow()
      .addField("street")
        .component(LuminoTextInput)
        .label("Street Address")
        .rules(Validators.required({ message: "Street address is required" }))
      .endField()
      .addField("city")
        .component(LuminoTextInput)
        .label("City")
      .endField()
      .layout([2, 1])
    .endRow();

    this.addRow()
      .addField("zipCode")
        .component(LuminoTextInput)
        .label("ZIP Code")
        .rules(Validators.pattern("^[0-9]{5}$", "Use five digits"))
      .endField()
      .addField("country")
        .component(LuminoSelect)
        .label("Country")
        .props({ options: countries })
      .endField()
    .endRow();

    this.addRow()
      .addComponent(LuminoButton)
        .children("Delete Address")
        .props({ variant: "secondary" })
        .onClick((ctx) => { ctx.removeCurrentItem?.(); })
        .hideByCondition((ctx) => ctx.mode === "view")
      .endComponent()
    .endRow();
  }
}
"""

EXPERIENCE_DIALOG = """\
import { Dialog, Validators } from "lumino/core";
import { LuminoTextInput, LuminoDatePicker, LuminoButton } from "lumino/react";

export class ExperienceDialog extends Dialog {
  constructor() {
    super("experience-dialog");
  }

  configure() {
    this.title((ctx) =>
      ctx.dialogOptions?.mode === "edit" ? "Edit Experience" : "Add Experience"
    );
    this.size("medium");

    this.addRow()
      .addField("company")
        .component(LuminoTextInput)
        .label("Company")
        .rules(Validators.required({ message: "Company is required" }))
      .endField()
      .addField("title")
        .component(LuminoTextInput)
        .label("Job Title")
      .endField()
      .layout([1, 1])
    .endRow();

    this.addRow()
      .addField("startDate")
        .component(LuminoDatePicker)
        .label("Start Date")
      .endField()
      .addField("endDate")
        .component(LuminoDatePicker)
        .label("End Date")
      .endField()
    .endRow();

    this.addRow()
      .style({ display: "flex", justifyContent: "flex-end", gap: "8px" })
      .addComponent(LuminoButton)
        .children("Cancel")
        .onClick((ctx) => {
          ctx.dialogOptions?.onCancel?.();
          ctx.close?.();
        })
      .endComponent()
      .addComponent(LuminoButton)
        .children("Save")
        .props({ variant: "primary" })
        .onClick(async (ctx) => {
          if (await ctx.validate?.()) {
            ctx.dialogOptions?.onSave?.(ctx.getFormData?.());
            ctx.close?.();
          }
        })
      .endComponent()
    .endRow();
  }
}
"""

EXPERIENCE_TABLE = """\
import { Component } from "lumino/core";
import { LuminoButton } from "lumino/react";
import { LumTable, LumTHead, LumTBody, LumTR, LumTH, LumTD } from "lumino/react/components/Containers";

export class ExperienceTable extends Component<Experience> {
  configure() {
    const headers = ["Company", "Job Title", "Start Date", "End Date"];
    const head = this.container(LumTable).add(LumTHead).add(LumTR);
    for (const header of headers) {
      head.add(LumTH).text(header).end();
    }

    this.container(LumTable)
      .add(LumTBody)
        .each()
          .add(LumTR)
            .add(LumTD).field("company").display().end()
            .add(LumTD).field("title").display().end()
            .add(LumTD).field("startDate").display().end()
            .add(LumTD).field("endDate").display().end()
            .add(LumTD)
              .hideByCondition((ctx) => ctx.mode === "view")
              .add(LuminoButton)
                .text("Edit")
                .onClick((ctx) => {
                  ctx.open(ExperienceDialog, {
                    data: ctx.getFormData(),
                    mode: "edit",
                    onSave: (data: Experience) => ctx.updateCurrentItem?.(data),
                  });
                })
              .end()
            .end()
          .end()
        .endEach()
      .end()
    .end();
  }
}
"""

EMPLOYEE_FORM = """\
import { Form, Validators } from "lumino/core";
import type { FormContext } from "lumino/core";
import { LuminoTextInput, LuminoSelect, LuminoTabs, LuminoButton } from "lumino/react";
import { Employee } from "./Employee";
import { Experience } from "./Experience";
import { departments } from "./options";

class EmployeeForm extends Form<Employee> {
  constructor() {
    super("employee-form");
  }

  configure() {
    this.setReadOnly((ctx) => ctx.mode === "view");

    this.addSection("Basic Information")
      .addRow()
        .addField("firstName")
          .component(LuminoTextInput)
          .label("First Name")
          .rules(Validators.required({ message: "First name is required" }))
        .endField()
        .addField("lastName")
          .component(LuminoTextInput)
          .label("Last Name")
          .rules(Validators.required({ message: "Last name is required" }))
        .endField()
        .layout([1, 1])
      .endRow()
      .addRow()
        .addField("email")
          .component(LuminoTextInput)
          .label("Email")
          .rules(Validators.required(), Validators.email("Please enter a valid email"))
        .endField()
        .addField("department")
          .component(LuminoSelect)
          .label("Department")
          .props({ options: departments })
          .visibleByAccess((ctx) => ctx.user?.hasAnyRole?.("admin", "hr"))
        .endField()
      .endRow()
    .endSection();

    this.addList<Address>("addresses")
      .as(LuminoTabs)
      .tabLabel((addr, index) => {
        if (addr.street) return addr.street;
        const typeLabel = addr.type
          ? `${addr.type.charAt(0).toUpperCase()}${addr.type.slice(1)}`
          : "Address";
        return `${typeLabel} #${index + 1}`;
      })
      .include(AddressFields)
      .end();

    this.addSection("Work Experience")
      .visibleByAccess((ctx) => ctx.user?.hasRole?.("admin"))
      .addComponent(LuminoButton)
        .children("+ Add Experience")
        .onClick((ctx: FormContext) => {
          ctx.open(ExperienceDialog, {
            data: new Experience(),
            mode: "add",
            onSave: (data: Experience) => ctx.list("experiences").add(data),
          });
        })
      .endComponent()
    .endSection();

    this.addList<Experience>("experiences")
      .include(ExperienceTable)
      .defaults(() => new Experience())
      .end();
  }
}

export { EmployeeForm };
"""

PAGE_TOOLBAR = """\
import { Component } from "lumino/core";
import { LuminoButton } from "lumino/react";

const roles = ["admin", "hr", "employee"];
const modes = [
  { mode: "new", label: "New" },
  { mode: "edit", label: "Edit" },
  { mode: "view", label: "View" },
];

class PageToolbar extends Component {
  configure() {
    const row = this.addRow().style({ display: "flex", justifyContent: "space-between" });

    for (let i = 0; i < roles.length; i++) {
      const role = roles[i];
      row.addComponent(LuminoButton)
        .children(role.charAt(0).toUpperCase() + role.slice(1))
        .props((ctx) => ({ variant: ctx.user?.hasRole?.(role) ? "cta" : "secondary" }))
        .style({ marginRight: i < roles.length - 1 ? "1px" : "auto" })
        .onClick((ctx) => {
          ctx.setUser?.({ id: "demo-user", name: "Demo User", roles: [role] });
        })
      .endComponent();
    }

    for (const modeConfig of modes) {
      row.addComponent(LuminoButton)
        .children(modeConfig.label)
        .onClick((ctx) => ctx.setMode?.(modeConfig.mode))
      .endComponent();
    }

    row.endRow();
  }
}

export { PageToolbar };
"""

FORM_BUILDER_PAGE = """\
/**
 * Form Builder Demo Page: modes (new/edit/view) and role-based access.
 */

import { Page } from "lumino/core";
import { EmployeeForm } from "./EmployeeForm";
import { Employee, createEmptyEmployee, createSampleEmployee } from "./Employee";
import { PageToolbar } from "./PageToolbar";

class FormBuilderPage extends Page<Employee> {
  private form = new EmployeeForm();

  constructor() {
    super("form-builder-page");
  }

  configure() {
    this.route("/demos/live/:mode?");

    this.mode((ctx) => {
      const mode = ctx.routeParams.mode;
      if (mode === "edit" || mode === "view") return mode;
      return "new";
    });

    this.onMode("new", (ctx) => ctx.setEntity(createEmptyEmployee()));
    this.onMode("edit", (ctx) => ctx.setEntity(createSampleEmployee()));
    this.onMode("view", (ctx) => ctx.setEntity(createSampleEmployee()));

    this.include(PageToolbar);
    this.addForm(this.form);
  }
}

export { FormBuilderPage };
"""

PAGE_STYLES = """\
.lum-section { margin-bottom: 16px; }
"""


@dataclass(frozen=True)
class DemoDefinition:
    id: str
    title: str
    description: str
    variant: Variant
    scope: Callable[[], CompilationScope]
    files: tuple[SourceUnit, ...]

    def sources(self) -> list[SourceUnit]:
        """Fresh copies of the pristine sources."""
        return [replace(f) for f in self.files]


CATALOG: Sequence[DemoDefinition] = (
    DemoDefinition(
        id="contact-form",
        title="Contact Form",
        description="Single-file form with a companion entity providing initial values.",
        variant=FORM_VARIANT,
        scope=form_scope,
        files=(SourceUnit("ContactForm.ts", CONTACT_FORM, is_entry=True),),
    ),
    DemoDefinition(
        id="employee-entity",
        title="Employee Entity",
        description="Single-file form with an exported entity class and computed options.",
        variant=FORM_VARIANT,
        scope=form_scope,
        files=(SourceUnit("EmployeeForm.ts", EMPLOYEE_ENTITY, is_entry=True),),
    ),
    DemoDefinition(
        id="form-builder-page",
        title="Form Builder Page",
        description="Multi-file page: entity models, reusable components, a dialog and a form.",
        variant=PAGE_VARIANT,
        scope=page_scope,
        files=(
            SourceUnit("options.ts", OPTIONS, read_only=True),
            SourceUnit("Employee.ts", EMPLOYEE_MODEL),
            SourceUnit("Address.ts", ADDRESS_MODEL),
            SourceUnit("Experience.ts", EXPERIENCE_MODEL),
            SourceUnit("AddressFields.ts", ADDRESS_FIELDS),
            SourceUnit("ExperienceDialog.ts", EXPERIENCE_DIALOG),
            SourceUnit("ExperienceTable.ts", EXPERIENCE_TABLE),
            SourceUnit("EmployeeForm.ts", EMPLOYEE_FORM),
            SourceUnit("PageToolbar.ts", PAGE_TOOLBAR),
            SourceUnit("FormBuilderPage.ts", FORM_BUILDER_PAGE, is_entry=True),
            SourceUnit("styles.css", PAGE_STYLES, read_only=True),
        ),
    ),
)

DEMOS_BY_ID = {d.id: d for d in CATALOG}
