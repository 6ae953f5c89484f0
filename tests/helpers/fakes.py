from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional


class FakeInstruction:
    def __init__(self, name: str, output: str = "", string: Optional[str] = None):
        self._name = name
        self._output = output
        self._string = string

    def get_name(self) -> str:
        return self._name

    def get_output(self) -> str:
        return self._output

    def get_string(self) -> Optional[str]:
        return self._string


class FakeBC:
    def __init__(self, instructions: Iterable[FakeInstruction]):
        self._instructions = list(instructions)

    def get_instructions(self):
        return list(self._instructions)


class FakeCode:
    def __init__(self, instructions: Iterable[FakeInstruction]):
        self._bc = FakeBC(instructions)

    def get_bc(self) -> FakeBC:
        return self._bc


class FakeMethod:
    def __init__(self, class_name: str, name: str, desc: str, instructions: Optional[Iterable[FakeInstruction]] = None):
        self._class_name = class_name
        self._name = name
        self._desc = desc
        self._code = FakeCode(instructions or [])

    def get_code(self) -> FakeCode:
        return self._code

    def get_class_name(self) -> str:
        return self._class_name

    def get_name(self) -> str:
        return self._name

    def get_descriptor(self) -> str:
        return self._desc


class FakeExternalMethod(FakeMethod):
    def get_code(self):
        return None


class FakeMethodAnalysis:
    def __init__(self, method: FakeMethod):
        self._method = method

    def get_method(self) -> FakeMethod:
        return self._method


class FakeAnalysis:
    def __init__(self, methods: Iterable[FakeMethod]):
        self._methods = [FakeMethodAnalysis(m) for m in methods]

    def get_methods(self):
        return list(self._methods)


@dataclass
class FakeAPK:
    package_name: str = "com.test"
    manifest_xml: Optional[object] = None
    version_name: Optional[str] = None

    def get_package(self) -> str:
        return self.package_name

    def get_android_manifest_xml(self):
        return self.manifest_xml

    def get_androidversion_name(self):
        return self.version_name


def ins_invoke(opcode: str, regs: List[str], cls: str, name: str, desc: str) -> FakeInstruction:
    left = ", ".join(list(regs) + [cls]) if regs else cls
    return FakeInstruction(opcode, f"{left}->{name}{desc}")


def ins_move_result(reg: str) -> FakeInstruction:
    return FakeInstruction("move-result-object", reg)


def ins_const_string(reg: str, value: str) -> FakeInstruction:
    return FakeInstruction("const-string", f"{reg}, \"{value}\"", string=value)


def ins_get_extra(intent_reg: str, key_reg: str, getter: str, desc: str) -> FakeInstruction:
    return ins_invoke("invoke-virtual", [intent_reg, key_reg], "Landroid/content/Intent;", getter, desc)


MANIFEST_XML = """
<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.test">
  <application>
    <activity android:name=".MainActivity">
      <intent-filter>
        <action android:name="android.intent.action.MAIN" />
        <category android:name="android.intent.category.LAUNCHER" />
      </intent-filter>
      <intent-filter>
        <action android:name="android.intent.action.VIEW" />
        <category android:name="android.intent.category.DEFAULT" />
        <category android:name="android.intent.category.BROWSABLE" />
        <data android:scheme="https" android:host="example.com" android:pathPrefix="/items" />
      </intent-filter>
      <intent-filter />
    </activity>
    <service android:name="com.test.SyncService" />
    <receiver android:name=".BootReceiver">
      <intent-filter>
        <action android:name="android.intent.action.BOOT_COMPLETED" />
      </intent-filter>
    </receiver>
    <provider android:name="com.test.NotesProvider" android:authorities="com.test.notes" />
  </application>
</manifest>
"""
